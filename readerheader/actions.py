"""Command pattern implementation for header actions."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING

from .constants import HeaderConstants

if TYPE_CHECKING:
    from .header import ReaderHeader


class HeaderCommand(ABC):
    """Base class for header commands."""

    @abstractmethod
    def execute(self, header: 'ReaderHeader') -> bool:
        """Execute the command.

        Args:
            header: ReaderHeader instance

        Returns:
            True if the command changed the header state
        """
        pass


class ModeCommand(HeaderCommand):
    """Base class for mode transitions."""

    def execute(self, header: 'ReaderHeader') -> bool:
        before = header.modes.mode
        self._transition(header)
        return header.modes.mode != before

    @abstractmethod
    def _transition(self, header: 'ReaderHeader'):
        """Perform the transition."""
        pass


class NextModeCommand(ModeCommand):
    def _transition(self, header):
        header.modes.next()


class PreviousModeCommand(ModeCommand):
    def _transition(self, header):
        header.modes.previous()


class CommandRegistry:
    """Maps dispatcher action names to header commands."""

    def __init__(self):
        self._commands: Dict[str, HeaderCommand] = {
            HeaderConstants.ACTION_NEXT: NextModeCommand(),
            HeaderConstants.ACTION_PREVIOUS: PreviousModeCommand(),
        }

    def names(self):
        return list(self._commands)

    def get_command(self, name: str) -> Optional[HeaderCommand]:
        return self._commands.get(name)

    def execute(self, header: 'ReaderHeader', name: str) -> bool:
        """Execute the command registered under name.

        Returns:
            True if the header state changed
        """
        command = self.get_command(name)
        if command:
            return command.execute(header)
        return False
