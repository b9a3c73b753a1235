"""
Structural checks for pulse programs.

Warnings are advisory: they are returned for display and never block
rendering or export.
"""
from typing import List

from .timeline import InstructionsLike, _instructions_of
from .types import OpCode

EMPTY_PROGRAM = "Empty instruction list"
UNMATCHED_LOOP = "Unmatched LOOP instructions (missing END_LOOP)"
BAD_TERMINATION = "Program should typically end with STOP or BRANCH instruction"

_TERMINAL_OPCODES = (OpCode.STOP, OpCode.BRANCH)


def validate_program(instructions: InstructionsLike) -> List[str]:
    """
    Return human-readable warnings for a program, in scan order.

    - an empty program yields only ``EMPTY_PROGRAM``
    - every END_LOOP that leaves the loop depth negative is reported by index
    - a positive final loop depth yields ``UNMATCHED_LOOP``
    - a last opcode other than STOP or BRANCH yields ``BAD_TERMINATION``
    """
    instructions = _instructions_of(instructions)
    if not instructions:
        return [EMPTY_PROGRAM]

    warnings = []

    # Depth is not clamped at zero.
    loop_depth = 0
    for index, inst in enumerate(instructions):
        if inst.opcode is OpCode.LOOP:
            loop_depth += 1
        elif inst.opcode is OpCode.END_LOOP:
            loop_depth -= 1
            if loop_depth < 0:
                warnings.append(f"Instruction {index}: END_LOOP without matching LOOP")

    if loop_depth > 0:
        warnings.append(UNMATCHED_LOOP)

    if instructions[-1].opcode not in _TERMINAL_OPCODES:
        warnings.append(BAD_TERMINATION)

    return warnings
