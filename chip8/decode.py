"""CHIP-8 instruction decoding.

A 16-bit word is parsed into one member of the closed :class:`Opcode` set
before anything is executed. Words that match no pattern raise
:class:`~chip8.errors.DecodeError`.
"""

import enum

from chex import dataclass

from chip8.constants import FAMILY_MASK, X_MASK, Y_MASK, N_MASK, NN_MASK, ADDRESS_MASK
from chip8.errors import DecodeError


class Opcode(enum.Enum):
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_EQ_IMM = "3XNN"
    SKIP_NE_IMM = "4XNN"
    SKIP_EQ_REG = "5XY0"
    SET_IMM = "6XNN"
    ADD_IMM = "7XNN"
    SET_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB_XY = "8XY5"
    SHIFT_RIGHT = "8XY6"
    SUB_YX = "8XY7"
    SHIFT_LEFT = "8XYE"
    SKIP_NE_REG = "9XY0"
    SET_INDEX = "ANNN"
    JUMP_OFFSET = "BNNN"
    RANDOM = "CXNN"
    DRAW = "DXYN"
    SKIP_KEY_PRESSED = "EX9E"
    SKIP_KEY_NOT_PRESSED = "EXA1"
    GET_DELAY_TIMER = "FX07"
    WAIT_FOR_KEY = "FX0A"
    SET_DELAY_TIMER = "FX15"
    SET_SOUND_TIMER = "FX18"
    ADD_TO_INDEX = "FX1E"
    FONT_CHARACTER = "FX29"
    BCD = "FX33"
    STORE_REGISTERS = "FX55"
    LOAD_REGISTERS = "FX65"


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: Opcode
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


# Families selected by the top nibble alone
_SIMPLE_FAMILIES = {
    0x1: Opcode.JUMP,
    0x2: Opcode.CALL,
    0x3: Opcode.SKIP_EQ_IMM,
    0x4: Opcode.SKIP_NE_IMM,
    0x5: Opcode.SKIP_EQ_REG,
    0x6: Opcode.SET_IMM,
    0x7: Opcode.ADD_IMM,
    0x9: Opcode.SKIP_NE_REG,
    0xA: Opcode.SET_INDEX,
    0xB: Opcode.JUMP_OFFSET,
    0xC: Opcode.RANDOM,
    0xD: Opcode.DRAW,
}

_SYSTEM_OPS = {
    0xE0: Opcode.CLEAR_SCREEN,
    0xEE: Opcode.RETURN,
}

_ALU_OPS = {
    0x0: Opcode.SET_REG,
    0x1: Opcode.OR,
    0x2: Opcode.AND,
    0x3: Opcode.XOR,
    0x4: Opcode.ADD_REG,
    0x5: Opcode.SUB_XY,
    0x6: Opcode.SHIFT_RIGHT,
    0x7: Opcode.SUB_YX,
    0xE: Opcode.SHIFT_LEFT,
}

_KEY_OPS = {
    0x9E: Opcode.SKIP_KEY_PRESSED,
    0xA1: Opcode.SKIP_KEY_NOT_PRESSED,
}

_MISC_OPS = {
    0x07: Opcode.GET_DELAY_TIMER,
    0x0A: Opcode.WAIT_FOR_KEY,
    0x15: Opcode.SET_DELAY_TIMER,
    0x18: Opcode.SET_SOUND_TIMER,
    0x1E: Opcode.ADD_TO_INDEX,
    0x29: Opcode.FONT_CHARACTER,
    0x33: Opcode.BCD,
    0x55: Opcode.STORE_REGISTERS,
    0x65: Opcode.LOAD_REGISTERS,
}


def _classify(instruction: int) -> Opcode:
    family = (instruction & FAMILY_MASK) >> 12
    if family in _SIMPLE_FAMILIES:
        return _SIMPLE_FAMILIES[family]

    if family == 0x0:
        table, key = _SYSTEM_OPS, instruction & NN_MASK
    elif family == 0x8:
        table, key = _ALU_OPS, instruction & N_MASK
    elif family == 0xE:
        table, key = _KEY_OPS, instruction & NN_MASK
    else:
        table, key = _MISC_OPS, instruction & NN_MASK

    try:
        return table[key]
    except KeyError:
        raise DecodeError(instruction) from None


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        opcode=_classify(instruction),
        x=(instruction & X_MASK) >> 8,
        y=(instruction & Y_MASK) >> 4,
        n=instruction & N_MASK,
        nn=instruction & NN_MASK,
        nnn=instruction & ADDRESS_MASK
    )
