"""Localised user-facing strings in English and French."""

from __future__ import annotations

from enum import IntEnum


class Language(IntEnum):
    """Supported interface languages."""

    EN = 1
    FR = 2


class StringId(IntEnum):
    """Identifiers of the localised strings."""

    BOOT_COMPLETE = 0
    SELECT_KB = 1
    SELECT_RES = 2
    DESKTOP_BTN = 3
    CONSOLE_BTN = 4
    RESTART = 5
    SHUTDOWN = 6
    TIMER_OK = 7
    KEYBOARD_OK = 8
    MOUSE_OK = 9


def _heading(title: str) -> str:
    return f"\n=== {title} ===\n"


_DISPLAY_MODES = "1) Normal (1024x768) 2) HD (1280x720) 3) FHD (1920x1080)\n"

# Each entry holds the English text first and the French text second.
_TABLE: dict[StringId, tuple[str, str]] = {
    StringId.BOOT_COMPLETE: (_heading("Boot Complete"), _heading("Demarrage Termine")),
    StringId.SELECT_KB: (
        "Press 1 for QWERTY, 2 for AZERTY\n",
        "Appuyez sur 1 pour QWERTY, 2 pour AZERTY\n",
    ),
    StringId.SELECT_RES: (
        f"Select Display: {_DISPLAY_MODES}",
        f"Selectionnez l'ecran: {_DISPLAY_MODES}",
    ),
    StringId.DESKTOP_BTN: ("NovexOS", "Menu"),
    StringId.CONSOLE_BTN: ("Terminal", "Console"),
    StringId.RESTART: ("Restart", "Redemarrer"),
    StringId.SHUTDOWN: ("Shutdown", "Eteindre"),
    StringId.TIMER_OK: ("PIT OK\n", "PIT OK\n"),
    StringId.KEYBOARD_OK: ("Keyboard OK\n", "Clavier OK\n"),
    StringId.MOUSE_OK: ("Mouse OK\n", "Souris OK\n"),
}

_COLUMN = {Language.EN: 0, Language.FR: 1}


class Localizer:
    """Holds the current language and looks up strings in it."""

    def __init__(self, language: Language = Language.EN) -> None:
        self.language = Language(language)

    def set(self, language: Language | int) -> None:
        """Switch language; unknown languages are ignored."""
        try:
            self.language = Language(language)
        except ValueError:
            return

    def get_string(self, string_id: StringId | int) -> str:
        """Return the string for ``string_id``, or "" for an unknown id."""
        try:
            sid = StringId(string_id)
        except ValueError:
            return ""
        return _TABLE[sid][_COLUMN[self.language]]