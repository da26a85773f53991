"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chip8.errors import StackUnderflow
from chip8.state import StackState


def push(stack: StackState, address) -> StackState:
    """Push address onto stack."""
    address = jnp.asarray(address, dtype=jnp.uint16).reshape(1)
    return stack.replace(data=jnp.concatenate([stack.data, address]))


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    if stack.depth == 0:
        raise StackUnderflow("Return with empty call stack")
    return stack.replace(data=stack.data[:-1]), stack.data[-1]
