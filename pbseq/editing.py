"""
Pure edit operations over instruction sequences.

Every function returns a new tuple; the input sequence is never modified.
"""
from typing import Optional, Sequence, Tuple, Union

from .time_utils import parse_in_scale, to_nanoseconds
from .types import Instruction, OpCode, TimeUnit

Instructions = Tuple[Instruction, ...]


def default_instruction(id: Optional[str] = None) -> Instruction:
    """The row an editor inserts: all flags off, CONTINUE, 1 μs."""
    return Instruction(flags=0, opcode=OpCode.CONTINUE, data=0, duration=1000,
                       units="ns", id=id, length=1000,
                       display_time_scale=TimeUnit.MICROSECOND.value)


def _check_index(instructions: Sequence[Instruction], index: int) -> None:
    if not 0 <= index < len(instructions):
        raise IndexError(f"Instruction index {index} out of range for {len(instructions)} instructions")


def append_instruction(instructions: Sequence[Instruction],
                       instruction: Optional[Instruction] = None) -> Instructions:
    if instruction is None:
        instruction = default_instruction(id=f"inst_{len(instructions) + 1}")
    return tuple(instructions) + (instruction,)


def remove_instruction(instructions: Sequence[Instruction], index: int) -> Instructions:
    _check_index(instructions, index)
    return tuple(inst for i, inst in enumerate(instructions) if i != index)


def update_instruction(instructions: Sequence[Instruction], index: int, **changes) -> Instructions:
    """Replace fields of one instruction.

    A new ``duration`` or ``units`` also resets ``length`` to the new
    duration in nanoseconds.
    """
    _check_index(instructions, index)
    updated = instructions[index].replace(**changes)
    if ("duration" in changes or "units" in changes) and "length" not in changes:
        updated = updated.replace(length=updated.duration_ns)
    return tuple(updated if i == index else inst for i, inst in enumerate(instructions))


def move_instruction(instructions: Sequence[Instruction], source: int, destination: int) -> Instructions:
    """Drag-and-drop reorder: take the row at ``source`` and insert it at ``destination``."""
    _check_index(instructions, source)
    _check_index(instructions, destination)
    items = list(instructions)
    items.insert(destination, items.pop(source))
    return tuple(items)


def duplicate_instruction(instructions: Sequence[Instruction], index: int) -> Instructions:
    """Insert a copy of one instruction right after it."""
    _check_index(instructions, index)
    original = instructions[index]
    copy = original.replace(id=f"{original.id}_copy") if original.id is not None else original
    items = list(instructions)
    items.insert(index + 1, copy)
    return tuple(items)


def parse_duration_edit(text: str, unit: Union[str, TimeUnit],
                        previous_ns: Union[int, float]) -> Union[int, float]:
    """
    Commit a typed duration edit, returning nanoseconds.

    Unparseable text becomes 0. An unknown unit or a negative result keeps
    the previously committed value.
    """
    try:
        to_nanoseconds(1, unit)
    except ValueError:
        return previous_ns
    value = parse_in_scale(text, unit)
    if value < 0:
        return previous_ns
    return value
