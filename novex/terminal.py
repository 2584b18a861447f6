"""An 80x25 VGA text-mode console kept as a buffer of 16-bit cells."""

from __future__ import annotations

from enum import IntEnum

WIDTH = 80
HEIGHT = 25


class VgaColor(IntEnum):
    """The sixteen VGA text colours."""

    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    LIGHT_GREY = 7
    DARK_GREY = 8
    LIGHT_BLUE = 9
    LIGHT_GREEN = 10
    LIGHT_CYAN = 11
    LIGHT_RED = 12
    LIGHT_MAGENTA = 13
    LIGHT_BROWN = 14
    WHITE = 15


def vga_entry_color(fg: int, bg: int) -> int:
    """Attribute byte: foreground in the low nibble, background in the high."""
    return (int(fg) | (int(bg) << 4)) & 0xFF


def _byte(char: str | int) -> int:
    if isinstance(char, int):
        if not 0 <= char <= 0xFF:
            raise ValueError(f"character byte out of range: {char}")
        return char
    if len(char) != 1 or ord(char) > 0xFF:
        raise ValueError(f"not a single-byte character: {char!r}")
    return ord(char)


def vga_entry(char: str | int, color: int) -> int:
    """16-bit cell: character in the low byte, attribute in the high byte."""
    return _byte(char) | ((color & 0xFF) << 8)


class VgaTerminal:
    """Text console with cursor, wrapping, tabs and scrolling."""

    def __init__(self) -> None:
        self.color = vga_entry_color(VgaColor.LIGHT_GREEN, VgaColor.BLACK)
        self.row = 0
        self.column = 0
        self._cells = [vga_entry(" ", self.color)] * (WIDTH * HEIGHT)

    def _put(self, code: int) -> None:
        self._cells[self.row * WIDTH + self.column] = vga_entry(code, self.color)

    def _scroll(self) -> None:
        blank = vga_entry(" ", self.color)
        self._cells = self._cells[WIDTH:] + [blank] * WIDTH

    def _newline(self) -> None:
        self.column = 0
        self.row += 1
        if self.row == HEIGHT:
            self.row = HEIGHT - 1
            self._scroll()

    def putchar(self, c: str | int) -> None:
        """Write one character, handling newline, backspace and tab."""
        code = _byte(c)
        if code == ord("\n"):
            self._newline()
        elif code == ord("\b"):
            if self.column > 0:
                self.column -= 1
                self._put(ord(" "))
        elif code == ord("\t"):
            target = min((self.column + 4) & ~3, WIDTH - 1)
            while self.column < target:
                self._put(ord(" "))
                self.column += 1
        else:
            self._put(code)
            self.column += 1
            if self.column == WIDTH:
                self._newline()

    def backspace(self) -> None:
        """Erase the character before the cursor on the current line."""
        if self.column > 0:
            self.column -= 1
            self._put(ord(" "))

    def write(self, text: str | bytes) -> None:
        """Write text; str is sent as its UTF-8 bytes."""
        data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        for code in data:
            self.putchar(code)

    def clear(self) -> None:
        """Blank the screen in the current colour and home the cursor."""
        self.row = 0
        self.column = 0
        self._cells = [vga_entry(" ", self.color)] * (WIDTH * HEIGHT)

    def cell(self, row: int, column: int) -> int:
        if not (0 <= row < HEIGHT and 0 <= column < WIDTH):
            raise IndexError(f"cell out of range: ({row}, {column})")
        return self._cells[row * WIDTH + column]

    def row_text(self, row: int) -> str:
        """The characters of one screen row, trailing blanks included."""
        if not 0 <= row < HEIGHT:
            raise IndexError(f"row out of range: {row}")
        start = row * WIDTH
        return "".join(chr(cell & 0xFF) for cell in self._cells[start:start + WIDTH])

    def cursor_offset(self) -> int:
        """Linear cursor position as programmed into the CRT controller."""
        return self.row * WIDTH + self.column