"""Tests for display operations (DXYN, 00E0)."""

import jax.numpy as jnp
from chip8 import execute, FONT_START
from conftest import set_registers, setup_sprite_in_memory

DIGIT_ZERO = [
    [1, 1, 1, 1],
    [1, 0, 0, 1],
    [1, 0, 0, 1],
    [1, 0, 0, 1],
    [1, 1, 1, 1],
]


class TestDraw:
    """Test sprite drawing."""

    def test_draw_font_zero(self, fresh_state):
        """Digit 0 glyph lands as its 5x4 pattern with no collision."""
        state = execute(fresh_state, 0xA000 | FONT_START)
        state = execute(state, 0xD015)  # V0 = V1 = 0

        assert jnp.array_equal(state.display[:5, :4], jnp.array(DIGIT_ZERO, dtype=bool))
        assert jnp.sum(state.display) == 14
        assert state.V[15] == 0
        assert state.draw_flag

    def test_draw_twice_erases_and_collides(self, fresh_state):
        """XOR drawing the same sprite twice clears it and sets VF."""
        state = execute(fresh_state, 0xA000 | FONT_START)
        state = execute(state, 0xD015)
        state = execute(state, 0xD015)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 1

    def test_draw_position(self, fresh_state):
        """Sprite origin comes from VX and VY."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])
        state = set_registers(state, V2=10, V3=5)
        state = execute(state, 0xA300)
        state = execute(state, 0xD231)

        assert state.display[5, 10]
        assert jnp.sum(state.display) == 1

    def test_draw_x_wraps_origin(self, fresh_state):
        """X origin wraps modulo the screen width."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])
        state = set_registers(state, V0=64 + 3)
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)

        assert state.display[0, 3]
        assert jnp.sum(state.display) == 1

    def test_draw_clips_right_edge(self, fresh_state):
        """Pixels past column 63 are dropped, not wrapped."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xFF])
        state = set_registers(state, V0=60)
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)

        assert jnp.all(state.display[0, 60:])
        assert not jnp.any(state.display[0, :60])
        assert jnp.sum(state.display) == 4

    def test_draw_clips_bottom_edge(self, fresh_state):
        """Rows past line 31 are dropped, not wrapped."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80, 0x80, 0x80, 0x80])
        state = set_registers(state, V1=30)
        state = execute(state, 0xA300)
        state = execute(state, 0xD014)

        assert state.display[30, 0]
        assert state.display[31, 0]
        assert jnp.sum(state.display) == 2

    def test_draw_y_off_screen_draws_nothing(self, fresh_state):
        """Y origin does not wrap."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xFF])
        state = set_registers(state, V1=40)
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)

        assert jnp.sum(state.display) == 0
        assert state.draw_flag

    def test_draw_resets_vf_without_collision(self, fresh_state):
        """VF is cleared before drawing."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0x80])
        state = set_registers(state, VF=1)
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)

        assert state.V[15] == 0

    def test_partial_overlap_collision(self, fresh_state):
        """One overlapping pixel is enough for VF = 1."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xC0])
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)  # pixels (0,0) and (1,0)
        state = set_registers(state, V0=1)
        state = execute(state, 0xD011)  # pixels (1,0) and (2,0)

        assert state.V[15] == 1
        assert state.display[0, 0]
        assert not state.display[0, 1]
        assert state.display[0, 2]

    def test_zero_height_sets_draw_flag(self, fresh_state):
        """DXY0 draws nothing but still flags the display."""
        state = execute(fresh_state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.draw_flag


class TestClearScreen:
    """Test 00E0."""

    def test_clear_screen(self, fresh_state):
        state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True).at[31, 63].set(True))

        state = execute(state, 0x00E0)

        assert not jnp.any(state.display)
        assert state.draw_flag
