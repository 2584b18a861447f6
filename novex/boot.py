"""The interactive first-boot sequence: language, keyboard and display choice."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .keyboard import KeyboardDecoder, Layout
from .lang import Language, Localizer, StringId
from .terminal import VgaColor, VgaTerminal, vga_entry_color

VERSION_LINE = "\n NovexOS v0.7.1 - Bare Metal Monolithic Kernel\n"
DEFAULT_RESOLUTION_ID = 3

_BANNER = (
    "  _   _                      ____   _____ ",
    " | \\ | |                    / __ \\ / ____|",
    " |  \\| | _____   _______  _| |  | | (___  ",
    " | . ` |/ _ \\ \\ / / _ \\ \\/ / |  | |\\___ \\ ",
    " | |\\  | (_) \\ V /  __/>  <| |__| |____) |",
    " |_| \\_|\\___/ \\_/ \\___/_/\\_\\\\____/|_____/",
)

# Keys accepted for each option; the AZERTY top row gives '&', 'e', '"'.
_OPTION_KEYS = {1: ("1", "&"), 2: ("2", "e"), 3: ("3", '"')}


@dataclass(frozen=True)
class BootChoices:
    """What the user picked during the first boot."""

    language: Language
    layout: Layout
    resolution_id: int = DEFAULT_RESOLUTION_ID


def banner_lines() -> list[str]:
    """The ASCII-art logo, one string per line."""
    return list(_BANNER)


def _choose(keys, options: tuple[int, ...]) -> int:
    for key in keys:
        for option in options:
            if key in _OPTION_KEYS[option]:
                return option
    raise EOFError("key input ended before a choice was made")


def run_boot_sequence(
    keys: Iterable[str],
    terminal: VgaTerminal,
    localizer: Localizer,
    keyboard: KeyboardDecoder,
) -> BootChoices:
    """Ask for language, layout and resolution, then show the banner.

    Keys that match no option are ignored. Raises EOFError if ``keys`` runs
    out before all three choices are made.
    """
    stream = iter(keys)

    terminal.clear()
    terminal.color = vga_entry_color(VgaColor.WHITE, VgaColor.BLACK)
    terminal.write("=== NovexOS First Boot ===\n\n")
    terminal.write("Select Language / Choisissez la langue:\n")
    terminal.write("[1] English\n")
    terminal.write("[2] Francais\n")
    terminal.write("\n> ")
    language = Language.EN if _choose(stream, (1, 2)) == 1 else Language.FR
    localizer.set(language)

    terminal.clear()
    terminal.write(localizer.get_string(StringId.SELECT_KB))
    layout = Layout.QWERTY if _choose(stream, (1, 2)) == 1 else Layout.AZERTY
    keyboard.set_layout(layout)

    terminal.clear()
    terminal.write(localizer.get_string(StringId.SELECT_RES))
    resolution_id = _choose(stream, (1, 2, 3))

    terminal.clear()
    terminal.color = vga_entry_color(VgaColor.LIGHT_CYAN, VgaColor.BLACK)
    for line in _BANNER:
        terminal.write(line + "\n")

    terminal.color = vga_entry_color(VgaColor.LIGHT_GREEN, VgaColor.BLACK)
    terminal.write(VERSION_LINE)

    terminal.color = vga_entry_color(VgaColor.LIGHT_GREY, VgaColor.BLACK)
    terminal.write(localizer.get_string(StringId.BOOT_COMPLETE))

    terminal.color = vga_entry_color(VgaColor.LIGHT_GREEN, VgaColor.BLACK)
    return BootChoices(language, layout, resolution_id)