"""CHIP-8 emulator package."""

from chip8.state import EmulatorState, create_state, reset, load_font_set
from chip8.emulator import (
    execute, fetch, step, load_program, load_rom, set_keys, tick_timers, clear_draw_flag
)
from chip8.decode import DecodedInstruction, Opcode, decode
from chip8.errors import Chip8Error, UsageError, LoadError, DecodeError, StackUnderflow, MemoryAccessError
from chip8.constants import *
from chip8.rendering import chip8_display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "create_state",
    "reset",
    "load_font_set",
    "fetch",
    "execute",
    "step",
    "load_program",
    "load_rom",
    "set_keys",
    "tick_timers",
    "clear_draw_flag",
    "DecodedInstruction",
    "Opcode",
    "decode",
    "Chip8Error",
    "UsageError",
    "LoadError",
    "DecodeError",
    "StackUnderflow",
    "MemoryAccessError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "MAX_PROGRAM_SIZE",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
