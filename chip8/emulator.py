"""Main CHIP-8 emulator execution engine."""

import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import Opcode, decode
from chip8.constants import PROGRAM_START, MAX_PROGRAM_SIZE, MEMORY_SIZE, NUM_KEYS
from chip8.errors import LoadError, MemoryAccessError
from chip8.instructions.system import execute_clear_screen, execute_return
from chip8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed
)
from chip8.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor,
    execute_alu_add, execute_alu_sub_xy, execute_alu_shift_right,
    execute_alu_sub_yx, execute_alu_shift_left
)
from chip8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8.instructions.display import execute_display
from chip8.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    Opcode.CLEAR_SCREEN: execute_clear_screen,
    Opcode.RETURN: execute_return,
    Opcode.JUMP: execute_jump,
    Opcode.CALL: execute_call,
    Opcode.SKIP_EQ_IMM: execute_skip_if_equal_immediate,
    Opcode.SKIP_NE_IMM: execute_skip_if_not_equal_immediate,
    Opcode.SKIP_EQ_REG: execute_skip_if_equal_register,
    Opcode.SET_IMM: execute_set,
    Opcode.ADD_IMM: execute_add,
    Opcode.SET_REG: execute_alu_set,
    Opcode.OR: execute_alu_or,
    Opcode.AND: execute_alu_and,
    Opcode.XOR: execute_alu_xor,
    Opcode.ADD_REG: execute_alu_add,
    Opcode.SUB_XY: execute_alu_sub_xy,
    Opcode.SHIFT_RIGHT: execute_alu_shift_right,
    Opcode.SUB_YX: execute_alu_sub_yx,
    Opcode.SHIFT_LEFT: execute_alu_shift_left,
    Opcode.SKIP_NE_REG: execute_skip_if_not_equal_register,
    Opcode.SET_INDEX: execute_set_index,
    Opcode.JUMP_OFFSET: execute_jump_with_offset,
    Opcode.RANDOM: execute_random,
    Opcode.DRAW: execute_display,
    Opcode.SKIP_KEY_PRESSED: execute_skip_if_key_pressed,
    Opcode.SKIP_KEY_NOT_PRESSED: execute_skip_if_key_not_pressed,
    Opcode.GET_DELAY_TIMER: execute_get_delay_timer,
    Opcode.WAIT_FOR_KEY: execute_wait_for_key,
    Opcode.SET_DELAY_TIMER: execute_set_delay_timer,
    Opcode.SET_SOUND_TIMER: execute_set_sound_timer,
    Opcode.ADD_TO_INDEX: execute_add_to_index,
    Opcode.FONT_CHARACTER: execute_font_character,
    Opcode.BCD: execute_bcd_conversion,
    Opcode.STORE_REGISTERS: execute_store_registers,
    Opcode.LOAD_REGISTERS: execute_load_registers,
}


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return HANDLERS[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high, low) -> int:
    """Pack two bytes into a 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    if pc + 1 >= MEMORY_SIZE:
        raise MemoryAccessError(f"Fetch at PC={pc:04X} runs past end of memory")
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState, keys=None) -> EmulatorState:
    """Run one cycle: write the keypad, fetch and execute."""
    if keys is not None:
        state = set_keys(state, keys)
    state, instruction = fetch(state)
    return execute(state, instruction)


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy program bytes into CHIP-8 memory starting at 0x200."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise LoadError(
            f"Program is {len(program)} bytes, at most {MAX_PROGRAM_SIZE} fit in memory"
        )
    if not program:
        return state
    program_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(program_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM file into CHIP-8 memory starting at 0x200."""
    try:
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        raise LoadError(f"Cannot read program '{filename}': {e}") from e
    return load_program(state, rom_data)


def set_keys(state: EmulatorState, keys) -> EmulatorState:
    """Replace the whole keypad with 16 pressed/released flags."""
    keypad = jnp.asarray(keys, dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got shape {keypad.shape}")
    return state.replace(keypad=keypad)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, stopping at zero.

    Called by the host at 60 Hz, independently of instruction rate.
    """
    delay = int(state.delay_timer)
    sound = int(state.sound_timer)
    return state.replace(
        delay_timer=jnp.asarray(max(delay - 1, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(sound - 1, 0), dtype=jnp.uint8),
    )


def clear_draw_flag(state: EmulatorState) -> EmulatorState:
    """Mark the display as redrawn."""
    return state.replace(draw_flag=jnp.asarray(False))
