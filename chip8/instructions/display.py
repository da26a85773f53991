"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction
from chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH, FLAG_REGISTER

# Pre-computed coordinate grids for display operations (row-major: [y, x])
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Only X wraps onto the screen; pixels past the right or bottom edge are
    clipped. VF is set when any drawn pixel was already on.
    """
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y])

    in_sprite = (
        (xx >= sprite_x) & (xx < sprite_x + SPRITE_WIDTH)
        & (yy >= sprite_y) & (yy < sprite_y + instruction.n)
    )

    row_offset = jnp.clip(yy - sprite_y, 0, 15)
    col_offset = jnp.clip(xx - sprite_x, 0, SPRITE_WIDTH - 1)
    sprite_bytes = state.memory[state.I + row_offset]
    sprite = (((sprite_bytes >> (7 - col_offset)) & 1) == 1) & in_sprite

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(collision),
        draw_flag=jnp.asarray(True),
    )
