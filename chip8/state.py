"""CHIP-8 emulator state structures."""

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA,
    SCREEN_WIDTH, SCREEN_HEIGHT, NUM_REGISTERS, NUM_KEYS,
)


@dataclass
class StackState:
    """Growable stack of return addresses for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(0, dtype=jnp.uint16))

    @property
    def depth(self) -> int:
        return self.data.shape[0]


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    draw_flag: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))


def reset(rng: jax.random.PRNGKey = None) -> EmulatorState:
    """Create a zeroed state with PC at the program start address."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    return EmulatorState(rng)


def load_font_set(state: EmulatorState) -> EmulatorState:
    """Copy the hexadecimal font glyphs into memory at FONT_START."""
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def create_state(rng: jax.random.PRNGKey = None) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    return load_font_set(reset(rng))
