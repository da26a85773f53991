"""CHIP-8 interpreter errors.

Every error is fatal for the running program: the host stops executing
cycles as soon as one is raised.
"""


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class UsageError(Chip8Error):
    """Wrong command line arguments."""


class LoadError(Chip8Error):
    """Program file unreadable or too large for memory."""


class DecodeError(Chip8Error):
    """Instruction word does not match any known opcode."""

    def __init__(self, instruction: int):
        self.instruction = instruction
        super().__init__(f"Unknown opcode: {instruction:04X}")


class StackUnderflow(Chip8Error):
    """Return executed with an empty call stack."""


class MemoryAccessError(Chip8Error):
    """Instruction or PC reaches past the end of memory."""
