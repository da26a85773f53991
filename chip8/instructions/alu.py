"""CHIP-8 ALU operations (8xxx).

Each operation takes the current VX and VY values and returns
``(result, vf)`` where ``vf`` is ``None`` when the flag register is left
untouched. The flag is written before VX, so ``8FY4`` and friends end with
the arithmetic result in VF, and ``8FY6`` / ``8FYE`` shift the new flag.
"""

from chip8.state import EmulatorState
from chip8.decode import DecodedInstruction
from chip8.constants import FLAG_REGISTER


def alu_set(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 255)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when VX > VY."""
    return (vx - vy) & 0xFF, int(vx > vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY6 - Shift right: VX >>= 1, VF = shifted out bit."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when VY > VX."""
    return (vy - vx) & 0xFF, int(vy > vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, int | None]:
    """8XYE - Shift left: VX <<= 1, VF = VX & 0x80 (not normalised to 1)."""
    return (vx << 1) & 0xFF, vx & 0x80


def make_alu_instruction(operation, in_place: bool = False):
    """Wrap an ALU operation into an instruction handler.

    In-place operations (the shifts) act on VX as it stands after the flag
    write, so with X = F they shift the freshly written flag.
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, vf = operation(vx, vy)

        new_V = state.V
        if vf is not None:
            new_V = new_V.at[FLAG_REGISTER].set(vf)
        if in_place:
            result, _ = operation(int(new_V[instruction.x]), vy)
        new_V = new_V.at[instruction.x].set(result)
        return state.replace(V=new_V)
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy)
execute_alu_shift_right = make_alu_instruction(alu_shift_right, in_place=True)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx)
execute_alu_shift_left = make_alu_instruction(alu_shift_left, in_place=True)
