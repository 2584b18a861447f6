"""Line-oriented command shell over the RAM filesystem and an optional disk."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from typing import Protocol, TextIO

from .keyboard import KeyboardDecoder, Layout
from .mbr import MasterBootRecord, PARTITION_START_LBA, create_partition_table
from .pmm import PhysicalMemoryManager
from .ramfs import RamFS, RamFSError
from .terminal import VgaTerminal
from .timer import PitTimer

MAX_CMD = 256
RAM_ROOT = "ram:/"
DISK_ROOT = "disk:/"
INSTALL_SECTORS = 20480
_CAT_LIMIT = 1023
_TIMER_HZ = 1000

# Port writes that power the machine off (QEMU, Bochs/old QEMU, keyboard controller reset).
SHUTDOWN_PORT_WRITES: tuple[tuple[int, int], ...] = (
    (0x604, 0x2000),
    (0xB004, 0x2000),
    (0x64, 0xFE),
)

_COLOR_USER = 0x0B
_COLOR_AT = 0x0A
_COLOR_HOST = 0x0E
_COLOR_PLAIN = 0x07
_COLOR_PATH = 0x09
_COLOR_ERROR = 0x0C
_COLOR_WARN = 0x0E
_COLOR_OK = 0x0A

_HELP = (
    "Available commands:\n"
    "  help          - Show help\n"
    "  clear         - Clear screen\n"
    "  echo <text>   - Print text\n"
    "  uname / version - System info\n"
    "  uptime        - System uptime\n"
    "  ls            - List files (RAM or Disk)\n"
    "  cd <path>     - Change directory (ram:/ or disk:/)\n"
    "  pwd           - Print working directory\n"
    "  mkdir <name>  - Create RAM directory\n"
    "  cat <file>    - Display file content\n"
    "  rm <file>     - Delete file\n"
    "  install       - Format disk (FAT32)\n"
    "  edit <file>   - Open text editor\n"
    "  startde       - Launch NovexDE desktop\n"
    "  shutdown      - Power off\n"
    "  reboot        - Reboot\n"
)


class ShellExit(Exception):
    """Raised when a command powers off or reboots the machine."""

    def __init__(self, action: str, port_writes: tuple[tuple[int, int], ...] = ()) -> None:
        self.action = action
        self.port_writes = port_writes
        super().__init__(action)


class _Terminal(Protocol):
    color: int

    def putchar(self, c: str | int) -> None: ...

    def backspace(self) -> None: ...

    def write(self, text: str | bytes) -> None: ...

    def clear(self) -> None: ...


class _Disk(Protocol):
    def read_sectors(self, lba: int, count: int) -> bytes: ...

    def write_sectors(self, lba: int, data: bytes) -> None: ...

    def list_dir(self, path: str) -> Iterable[str]: ...

    def read_file(self, name: str, max_len: int) -> bytes: ...

    def delete_file(self, name: str) -> None: ...

    def format_partition(self, lba: int, sector_count: int) -> None: ...


def _skip_spaces(text: str) -> str:
    return text.lstrip(" ")


class Shell:
    """Collects typed characters into a command line and runs built-in commands."""

    def __init__(
        self,
        terminal: _Terminal | None = None,
        ramfs: RamFS | None = None,
        pmm: PhysicalMemoryManager | None = None,
        timer: PitTimer | None = None,
        keyboard: KeyboardDecoder | None = None,
        disk: _Disk | None = None,
        read_key: Callable[[], str] | None = None,
    ) -> None:
        self.terminal = terminal if terminal is not None else VgaTerminal()
        self.ramfs = ramfs if ramfs is not None else RamFS()
        self.pmm = pmm if pmm is not None else PhysicalMemoryManager()
        self.timer = timer if timer is not None else PitTimer(_TIMER_HZ)
        self.keyboard = keyboard if keyboard is not None else KeyboardDecoder()
        self.disk = disk
        self._read_key = read_key
        self._buffer: list[str] = []
        self._cwd = RAM_ROOT
        self.power_state: str | None = None

    # ------- state -------

    def cwd(self) -> str:
        return self._cwd

    def _on_disk(self) -> bool:
        return self._cwd.startswith("disk:")

    def _write(self, text: str | bytes) -> None:
        self.terminal.write(text)

    def _colored(self, color: int, text: str) -> None:
        self.terminal.color = color
        self._write(text)

    def _key(self) -> str:
        return self._read_key() if self._read_key is not None else ""

    # ------- input -------

    def prompt(self) -> None:
        """Write the coloured prompt, leaving the terminal colour as it was."""
        old = self.terminal.color
        self._colored(_COLOR_USER, "omega")
        self._colored(_COLOR_AT, "@")
        self._colored(_COLOR_HOST, "os")
        self._colored(_COLOR_PLAIN, ":")
        self._colored(_COLOR_PATH, self._cwd)
        self._colored(_COLOR_PLAIN, "$ ")
        self.terminal.color = old

    def input(self, c: str) -> None:
        """Feed one typed character; Enter runs the line, backspace edits it."""
        if c == "\n":
            self.terminal.putchar("\n")
            command = "".join(self._buffer)
            self._buffer.clear()
            self.execute(command)
            self.prompt()
        elif c == "\b":
            if self._buffer:
                self._buffer.pop()
                self.terminal.backspace()
        elif len(self._buffer) < MAX_CMD - 1 and len(c) == 1 and " " <= c <= "~":
            self._buffer.append(c)
            self.terminal.putchar(c)

    @property
    def pending(self) -> str:
        """The command line typed so far."""
        return "".join(self._buffer)

    # ------- dispatch -------

    def execute(self, command: str) -> None:
        """Run one command line."""
        c = _skip_spaces(command)
        if not c:
            return

        exact: dict[str, Callable[[], None]] = {
            "help": lambda: self._write(_HELP),
            "clear": self.terminal.clear,
            "uname": self._uname,
            "version": self._version,
            "uptime": self._uptime,
            "reboot": self._reboot,
            "shutdown": self._shutdown,
            "keymap": self._keymap,
            "ls": self._ls,
            "pwd": self._pwd,
            "install": self._install,
            "free": self._free,
            "edit": lambda: self._edit(""),
            "startde": self._startde,
        }
        prefixed: list[tuple[str, Callable[[str], None]]] = [
            ("cd ", self._cd),
            ("mkdir ", self._mkdir),
            ("echo ", self._echo),
            ("color ", self._color),
            ("cat ", self._cat),
            ("rm ", self._rm),
            ("edit ", self._edit),
        ]

        action = exact.get(c)
        if action is not None:
            action()
            return
        for prefix, handler in prefixed:
            if c.startswith(prefix):
                handler(c[len(prefix):])
                return
        self._write(f"Unknown command: {c}\n")

    # ------- informational commands -------

    def _uname(self) -> None:
        self._write("NovexOS v0.7.1 [x86_64] - FAT32 Support Enabled\n")

    def _version(self) -> None:
        self._write("NovexOS version 0.7.1\n")
        self._write("Features: 64-bit Long Mode, ATA LBA48 (PIO), FAT32, MBR\n")

    def _uptime(self) -> None:
        self._write(f"Uptime: {self.timer.uptime_seconds()} seconds\n")

    def _echo(self, args: str) -> None:
        self._write(_skip_spaces(args))
        self.terminal.putchar("\n")

    def _color(self, args: str) -> None:
        digits = _skip_spaces(args)
        if not digits:
            return
        color = 0
        for ch in digits:
            if not "0" <= ch <= "9":
                break
            color = (color * 10 + int(ch)) & 0xFF
        self.terminal.color = color & 0x0F
        self._write("Color changed.\n")

    def _keymap(self) -> None:
        name = "AZERTY" if self.keyboard.layout() == Layout.AZERTY else "QWERTY"
        self._write(f"Layout: {name}\n")

    def _free(self) -> None:
        self._write(f"RAM Free: {self.pmm.free_pages() * 4} KB\n")

    # ------- filesystem commands -------

    def _pwd(self) -> None:
        self._write(self._cwd)
        self.terminal.putchar("\n")

    def _cd(self, args: str) -> None:
        path = _skip_spaces(args)
        if not path:
            self._write("Usage: cd <path>\n")
        elif path in ("ram:", "ram:/", "/"):
            self._cwd = RAM_ROOT
        elif path in ("disk:", "disk:/"):
            self._cwd = DISK_ROOT
        else:
            self._write("Unknown path. Try 'ram:/' or 'disk:/'\n")

    def _mkdir(self, args: str) -> None:
        name = _skip_spaces(args)
        if not name:
            self._write("Usage: mkdir <name>\n")
            return
        if self._on_disk():
            self._write("MKDIR on disk not implemented.\n")
            return
        try:
            self.ramfs.mkdir(name)
        except RamFSError:
            self._write("Could not create directory.\n")
        else:
            self._write("Directory created.\n")

    def _ls(self) -> None:
        if self._on_disk():
            self._write("Listing Disk (FAT32):\n")
            if self.disk is not None:
                for line in self.disk.list_dir("/"):
                    self._write(line if line.endswith("\n") else line + "\n")
            return
        self._write("Listing RAM Filesystem:\n")
        for entry in self.ramfs.list():
            kind = "[DIR] " if entry.is_dir else "      "
            line = f"  {kind}{entry.name.ljust(20)}"
            line += "\n" if entry.is_dir else f"{entry.size} bytes\n"
            self._write(line)

    def _cat(self, args: str) -> None:
        name = _skip_spaces(args)
        if not name:
            self._write("Usage: cat <file>\n")
            return
        if self._on_disk():
            try:
                if self.disk is None:
                    raise FileNotFoundError(name)
                data = self.disk.read_file(name, _CAT_LIMIT)
            except OSError:
                self._write("File not found on disk.\n")
                return
        else:
            try:
                data = self.ramfs.read(name)
            except RamFSError:
                self._write("File not found in RAM.\n")
                return
        self._write(bytes(data[:_CAT_LIMIT]))
        self.terminal.putchar("\n")

    def _rm(self, args: str) -> None:
        name = _skip_spaces(args)
        if not name:
            self._write("Usage: rm <file>\n")
            return
        if self._on_disk():
            if self.disk is not None:
                self.disk.delete_file(name)
            self._write("Disk write not fully implemented yet.\n")
            return
        try:
            self.ramfs.delete(name)
        except RamFSError:
            self._write("File not found.\n")
        else:
            self._write("Deleted.\n")

    # ------- installation -------

    def _install(self) -> None:
        self._colored(_COLOR_WARN, "--- NovexOS Installer ---\n")
        self.terminal.color = _COLOR_PLAIN

        self._write("Detecting disk...\n")
        disk = self.disk
        if disk is None:
            self._colored(_COLOR_ERROR, "ERROR: No hard disk detected on Primary Master!\n")
            self._colored(_COLOR_PLAIN, "Make sure QEMU has a disk on IDE bus=0,unit=0.\n")
            return
        self._write("Hard disk detected.\n")

        current = MasterBootRecord.from_bytes(disk.read_sectors(0, 1))
        if current.has_foreign_partitions():
            self._colored(_COLOR_ERROR, "WARNING: Other OS detected. Dual-boot enabled.\n")
            self._colored(_COLOR_PLAIN, "Installation will preserve existing partitions.\n")
        else:
            self._write("No other OS detected. Clean install.\n")

        self._write("Proceed with installation? (y/n): ")
        answer = self._key()
        if answer:
            self.terminal.putchar(answer[0])
        self.terminal.putchar("\n")
        if answer[:1] not in ("y", "Y"):
            self._write("Installation aborted.\n")
            return

        self._write("Partitioning disk...\n")
        mbr = create_partition_table(INSTALL_SECTORS)
        self._write("  [1/9] MBR created\n")
        disk.write_sectors(0, mbr.to_bytes())
        self._write("  [2/9] MBR written to disk\n")

        self._write("Formatting NovexOS partition (FAT32)...\n")
        disk.format_partition(PARTITION_START_LBA, INSTALL_SECTORS - PARTITION_START_LBA)
        self._write("  [3/9] FAT32 format done\n")

        self._colored(_COLOR_OK, "Installation SUCCESSFUL!\n")
        self.terminal.color = _COLOR_PLAIN
        self._write("PLEASE REMOVE INSTALLATION MEDIA (ISO) NOW.\n")
        self._write("Press any key to reboot from the disk...\n")
        self._key()
        self._write("\nRebooting...\n")
        self._reboot()

    # ------- system commands -------

    def _power_off(self, action: str, port_writes: tuple[tuple[int, int], ...]) -> None:
        self._buffer.clear()
        self.power_state = action
        raise ShellExit(action, port_writes)

    def _reboot(self) -> None:
        """Reset the machine; the shell stops taking input."""
        self._power_off("reboot", ())

    def _shutdown(self) -> None:
        """Power the machine off through the known shutdown ports."""
        self._power_off("shutdown", SHUTDOWN_PORT_WRITES)

    def _edit(self, args: str) -> None:
        filename = _skip_spaces(args) or "untitled.txt"
        self._write(f"Editor not available: {filename}\n")

    def _startde(self) -> None:
        self._write("Desktop environment not available.\n")


class _StreamTerminal:
    """Terminal that writes plain text to a stream, ignoring colours."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.color = 0x0A

    def putchar(self, c: str | int) -> None:
        self.stream.write(chr(c) if isinstance(c, int) else c)

    def backspace(self) -> None:
        self.stream.write("\b \b")

    def write(self, text: str | bytes) -> None:
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        self.stream.write(text)

    def clear(self) -> None:
        self.stream.write("\x1b[2J\x1b[H")


def main(argv: list[str] | None = None) -> int:
    """Run the shell on standard input and output until shutdown or end of input."""
    parser = argparse.ArgumentParser(prog="novex", description="NovexOS command shell")
    parser.parse_args(argv)

    def read_key() -> str:
        return sys.stdin.readline()[:1]

    shell = Shell(terminal=_StreamTerminal(sys.stdout), read_key=read_key)
    shell.prompt()
    try:
        while True:
            line = sys.stdin.readline()
            if not line:
                break
            for ch in line.rstrip("\n"):
                shell.input(ch)
            shell.input("\n")
    except ShellExit as exc:
        sys.stdout.write(f"\n[{exc.action}]\n")
    sys.stdout.flush()
    return 0