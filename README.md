# novex

`novex` models the core of a small x86-64 hobby operating system in plain
Python. Each piece works on ordinary Python values and can be used and
tested on its own; nothing touches real hardware.

- `novex.lang`: English and French system strings (`Language`, `StringId`,
  `Localizer`). Unknown languages passed to `Localizer.set` are ignored; an
  unknown string id gives `""`.
- `novex.ramfs`: a flat in-memory filesystem of 32 slots, files of at most
  4096 bytes, names cut to 31 characters (`RamFS`, `RamFile`, `RamFSError`).
- `novex.pmm`: a page allocator for 4 KiB pages, set up from Multiboot
  memory information (`PhysicalMemoryManager`, `MultibootInfo`,
  `MemoryMapEntry`, `OutOfMemoryError`). Without a memory map, pages from
  2 MiB up are free; with one, available regions above 1 MiB are freed.
- `novex.mbr`: reading, checking and building 512-byte Master Boot Records
  (`MasterBootRecord`, `PartitionEntry`, `create_partition_table`).
- `novex.keyboard`: PS/2 scancode set 1 decoding for QWERTY and AZERTY,
  with Shift and Ctrl tracking; Escape gives `"\x1b"`, Ctrl+S gives `"\x13"`
  (`KeyboardDecoder`, `Layout`).
- `novex.mouse`: three-byte PS/2 mouse packet decoding with doubled speed
  and clamping to the screen (`MouseDecoder`).
- `novex.timer`: the programmable interval timer's divisor, command bytes,
  tick count and uptime (`PitTimer`, `pit_divisor`).
- `novex.terminal`: an 80x25 VGA text console of 16-bit cells, with
  wrapping, scrolling, tabs and backspace (`VgaTerminal`, `VgaColor`,
  `vga_entry`, `vga_entry_color`).
- `novex.isr`: an interrupt handler table. `InterruptController.dispatch`
  returns the end-of-interrupt port writes for IRQ vectors 32-47 and raises
  `CriticalException` for a CPU exception without a handler;
  `pic_remap_sequence` lists the PIC remapping writes. `Registers` holds the
  saved CPU state.
- `novex.shell`: the command shell (`Shell`, `ShellExit`) and the `novex`
  command.
- `novex.vbe`: display mode choice and framebuffer arithmetic
  (`DisplayMode`, `resolution_candidates`, `select_mode`,
  `pci_config_address`, `framebuffer_page_entries`).
- `novex.boot`: the first-boot dialogue for language, keyboard layout and
  resolution (`run_boot_sequence`, `BootChoices`, `banner_lines`). It reads
  keys from any iterable of characters and raises `EOFError` if they run out
  before all three choices are made.

The package has no runtime dependencies.

## Installation

```
pip install .
```

## The shell

Installing the package provides the `novex` command, which runs the shell
on standard input and output:

```
novex
```

Each input line is typed into the shell and run. The prompt shows the
current directory, which starts at `ram:/`. Commands:

- `help`, `clear`, `echo <text>`, `uname`, `version`, `uptime`
- `pwd`, `cd <path>` (`ram:/`, `ram:`, `/`, `disk:/` or `disk:`), `ls`,
  `mkdir <name>`, `cat <file>`, `rm <file>`
- `free` (free memory from the page allocator), `keymap` (current layout),
  `color <n>` (sets the text colour to `n & 15`)
- `install`, `edit [file]`, `startde`
- `reboot` and `shutdown`, which end the session

The shell stops at end of input or at `reboot`/`shutdown`. From Python, a
`Shell` can be given its own terminal, `RamFS`, `PhysicalMemoryManager`,
`PitTimer`, `KeyboardDecoder`, a key reader for questions, and a disk object
providing `read_sectors`, `write_sectors`, `list_dir`, `read_file`,
`delete_file` and `format_partition`. `reboot` and `shutdown` raise
`ShellExit`, whose `action` and `port_writes` describe what the machine
would do.

## What it does not do

- The `novex` command has no disk: `cd disk:/` works, but `ls` there lists
  nothing, `cat` reports the file as not found, and `install` reports that
  no hard disk is detected. With a disk object supplied from Python,
  `install` writes a new MBR and asks the disk to format the partition; it
  does not copy a kernel or a boot loader.
- There is no text editor and no desktop: `edit` and `startde` only print
  that they are not available.
- Nothing advances the timer in the `novex` command, so `uptime` reports 0.
- There is no FAT32, NTFS or ext4 reader; only the RAM filesystem stores
  files.

## Using the pieces from Python

```python
from novex.mbr import create_partition_table, MasterBootRecord

mbr = create_partition_table(20480)
raw = mbr.to_bytes()                 # 512 bytes, ending in 0x55 0xAA
again = MasterBootRecord.from_bytes(raw)
assert again.is_valid()
print(again.find_fat_partition())    # 2048, the start of the FAT32 partition
```

```python
from novex.lang import Language, Localizer, StringId

strings = Localizer()
strings.set(Language.FR)
print(strings.get_string(StringId.KEYBOARD_OK))   # "Clavier OK"
```

```python
from novex.ramfs import RamFS

fs = RamFS()
fs.write("notes.txt", "hello")
print(fs.read("notes.txt"))          # b'hello'
print(len(fs))                       # 1
```

Errors are raised as exceptions: a full filesystem, a missing file or an
oversized file raises `RamFSError`, an exhausted allocator raises
`OutOfMemoryError`, and an unhandled CPU exception raises
`CriticalException`.

## Running the tests

```
pip install ".[test]"
pytest
```