"""Tests for ALU operations (8xxx)."""

import pytest
from chip8 import execute, DecodeError
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_same(self, fresh_state):
        """8XY3 - XOR with same value should be 0."""
        state = set_registers(fresh_state, V3=0xAA, V4=0xAA)

        state = execute(state, 0x8343)  # V3 ^= V4

        assert state.V[3] == 0x00

    def test_logic_ops_leave_vf_untouched(self, fresh_state):
        """8XY0-8XY3 do not touch the flag register."""
        for op in (0x0, 0x1, 0x2, 0x3):
            state = set_registers(fresh_state, V1=0x0F, V2=0xF0, VF=0x42)
            state = execute(state, 0x8120 | op)
            assert state.V[15] == 0x42, f"8XY{op:X} changed VF"


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    @pytest.mark.parametrize("a,b", [(0x10, 0x20), (0x80, 0x7F), (0xFF, 0x00), (0, 0)])
    def test_alu_add_no_carry(self, fresh_state, a, b):
        """8XY4 - Add without carry when the sum fits a byte."""
        state = set_registers(fresh_state, V1=a, V2=b)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == a + b
        assert state.V[15] == 0

    @pytest.mark.parametrize("a,b", [(0xFF, 0x01), (0x80, 0x80), (0xFF, 0xFF), (200, 100)])
    def test_alu_add_with_carry(self, fresh_state, a, b):
        """8XY4 - Add with carry wraps and sets VF."""
        state = set_registers(fresh_state, V1=a, V2=b)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == (a + b) % 256
        assert state.V[15] == 1

    @pytest.mark.parametrize("a,b", [(0x30, 0x10), (0x10, 0x30), (0x20, 0x20), (0, 0xFF), (0xFF, 0)])
    def test_alu_sub_xy(self, fresh_state, a, b):
        """8XY5 - VF = 1 only when VX is strictly greater than VY."""
        state = set_registers(fresh_state, V3=a, V4=b)

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == (a - b) % 256
        assert state.V[15] == (1 if a > b else 0)

    def test_alu_sub_xy_equal_clears_flag(self, fresh_state):
        """8XY5 - Equal operands give 0 with VF = 0."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55, VF=1)

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 0

    @pytest.mark.parametrize("vx,vy", [(0x10, 0x30), (0x30, 0x10), (0x20, 0x20)])
    def test_alu_sub_yx(self, fresh_state, vx, vy):
        """8XY7 - VX = VY - VX, VF = 1 only when VY > VX."""
        state = set_registers(fresh_state, V1=vx, V2=vy)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == (vy - vx) % 256
        assert state.V[15] == (1 if vy > vx else 0)


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number."""
        state = set_registers(fresh_state, V1=0x04, V2=0xFF)  # V2 ignored

        state = execute(state, 0x8126)  # V1 >>= 1

        assert state.V[1] == 0x02
        assert state.V[15] == 0

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right, odd number."""
        state = set_registers(fresh_state, V3=0x05)

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - VF holds the raw 0x80 bit, not a normalised 1."""
        state = set_registers(fresh_state, V3=0x81, V4=0xFF)

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 0x80

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Top bit clear leaves VF at 0."""
        state = set_registers(fresh_state, V3=0x41, VF=1)

        state = execute(state, 0x834E)

        assert state.V[3] == 0x82
        assert state.V[15] == 0

    def test_shift_right_flag_register(self, fresh_state):
        """8FY6 - The shift acts on the flag just written, leaving VF at 0."""
        state = set_registers(fresh_state, VF=0x05)

        state = execute(state, 0x8F06)

        assert state.V[15] == 0

    def test_shift_left_flag_register(self, fresh_state):
        """8FYE - 0x41 gives flag 0, and shifting 0 leaves VF at 0."""
        state = set_registers(fresh_state, VF=0x41)

        state = execute(state, 0x8F0E)

        assert state.V[15] == 0

    def test_shift_left_flag_register_top_bit(self, fresh_state):
        """8FYE - Flag 0x80 shifted left drops out of the byte."""
        state = set_registers(fresh_state, VF=0xC1)

        state = execute(state, 0x8F0E)

        assert state.V[15] == 0


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Undefined 8XYN variants are decode errors."""
        with pytest.raises(DecodeError):
            execute(fresh_state, 0x8120 | op)

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)

        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = set_registers(state, V5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_as_source(self, fresh_state):
        """Flag register can be an operand."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52
        assert state.V[15] == 0

    def test_vf_as_destination_keeps_result(self, fresh_state):
        """With X = F the arithmetic result overwrites the flag."""
        state = set_registers(fresh_state, VF=0x10, V1=0x02)

        state = execute(state, 0x8F14)  # VF += V1, no carry

        assert state.V[15] == 0x12
