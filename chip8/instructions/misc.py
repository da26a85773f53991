"""CHIP-8 miscellaneous instructions (Exxx, Fxxx)."""

import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction
from chip8.constants import FONT_START, FONT_GLYPH_SIZE, FLAG_REGISTER, INDEX_OVERFLOW_THRESHOLD, MEMORY_SIZE
from chip8.errors import MemoryAccessError


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register.

    VF is set when the new I is above 1000, not on a carry out of 0xFFF.
    """
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return state.replace(
        I=jnp.asarray(new_i, dtype=jnp.uint16),
        V=state.V.at[FLAG_REGISTER].set(int(new_i > INDEX_OVERFLOW_THRESHOLD))
    )


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the PC is rewound so the same instruction runs again
    on the next cycle.
    """
    if not bool(jnp.any(state.keypad)):
        return state.replace(pc=state.pc - 2)
    pressed_key = jnp.argmax(state.keypad)
    return state.replace(V=state.V.at[instruction.x].set(pressed_key))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = int(state.V[instruction.x]) & 0x0F
    return state.replace(I=jnp.asarray(FONT_START + digit * FONT_GLYPH_SIZE, dtype=jnp.uint16))


def _memory_range(state: EmulatorState, count: int) -> int:
    """Start address of ``count`` bytes at I, checked against the end of memory."""
    start = int(state.I)
    if start + count > MEMORY_SIZE:
        raise MemoryAccessError(f"{count} bytes at I={start:04X} run past end of memory")
    return start


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2.

    Always writes three digits, so 7 is stored as 0, 0, 7.
    """
    value = int(state.V[instruction.x])
    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    start = _memory_range(state, 3)
    return state.replace(memory=state.memory.at[start:start + 3].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    start = _memory_range(state, count)
    return state.replace(memory=state.memory.at[start:start + count].set(state.V[:count]))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    start = _memory_range(state, count)
    return state.replace(V=state.V.at[:count].set(state.memory[start:start + count]))
