"""A hobby operating system core in Python: filesystem, memory, input, console, boot and shell."""

__version__ = "0.7.1"