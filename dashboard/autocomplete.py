# dashboard/autocomplete.py
"""
Keyboard-driven suggestion list for a single text field.

One Autocomplete instance is created per field; the transitions are shared:

    idle --focus/input--> open --Down/Up--> navigating
    navigating --Enter--> committed      open/navigating --Escape--> cancelled

Typing again reopens the list with nothing highlighted.
"""
from collections.abc import Callable, Sequence
from enum import Enum

ARROW_DOWN = "ArrowDown"
ARROW_UP = "ArrowUp"
ENTER = "Enter"
ESCAPE = "Escape"


class AutocompletePhase(str, Enum):
    IDLE = "idle"
    OPEN = "open"
    NAVIGATING = "navigating"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class Autocomplete:
    def __init__(self, source: Callable[[], Sequence[str]], value: str = ""):
        self.source = source
        self.value = value
        self.is_open = False
        self.index = -1
        self.phase = AutocompletePhase.IDLE

    def suggestions(self) -> list[str]:
        """Source values containing the current text, case-insensitively."""
        needle = self.value.lower()
        return [item for item in self.source() if needle in item.lower()]

    def visible(self) -> list[str]:
        """What the dropdown shows: nothing while closed or while the field is empty."""
        if not self.is_open or not self.value:
            return []
        return self.suggestions()

    def on_focus(self) -> None:
        self.is_open = True
        if self.phase is AutocompletePhase.IDLE:
            self.phase = AutocompletePhase.OPEN

    def on_input(self, text: str) -> None:
        self.value = text
        self.is_open = True
        self.index = -1
        self.phase = AutocompletePhase.OPEN

    def on_key(self, key: str) -> bool:
        """
        Handle a key press. Returns True when the key was consumed, so the
        caller should suppress its default action (e.g. form submit on Enter).
        """
        options = self.suggestions()
        if not self.is_open or not options:
            return False

        if key == ARROW_DOWN:
            self.index = min(self.index + 1, len(options) - 1)
            self.phase = AutocompletePhase.NAVIGATING
            return True
        if key == ARROW_UP:
            self.index = max(self.index - 1, -1)
            self.phase = AutocompletePhase.NAVIGATING if self.index >= 0 else AutocompletePhase.OPEN
            return True
        if key == ENTER:
            if 0 <= self.index < len(options):
                self._commit(options[self.index])
            return True
        if key == ESCAPE:
            self.close(AutocompletePhase.CANCELLED)
            return True
        return False

    def pick(self, value: str) -> None:
        """A suggestion was clicked."""
        self._commit(value)

    def close(self, phase: AutocompletePhase = AutocompletePhase.IDLE) -> None:
        self.is_open = False
        self.index = -1
        self.phase = phase

    def reset(self, value: str = "") -> None:
        self.value = value
        self.close()

    @property
    def highlighted(self) -> str | None:
        options = self.suggestions()
        if 0 <= self.index < len(options):
            return options[self.index]
        return None

    def _commit(self, value: str) -> None:
        self.value = value
        self.close(AutocompletePhase.COMMITTED)
