"""
Export as a SpinCore PulseBlaster Interpreter listing.

Each line is ``[label:] 0b<24 flag bits>, <duration><unit>[, opcode[, data]]``.
Branch and subroutine targets are resolved to labels in two passes: the
first collects every index some BRANCH/JSR points at, the second emits
``line<N>:`` in front of those instructions.
"""
from datetime import datetime
from typing import Optional, Set

from ..flags import format_binary
from ..time_utils import format_number, requantize
from ..types import Instruction, OpCode, Program
from .common import program_header

START_LABEL = "start"
_BLANK_LABEL = " " * len(f"{START_LABEL}: ")

_FORMAT_NOTES = (
    "//",
    "// Format: [label:] 0b111111111111111111111111, duration[, opcode[, data]]",
    "// Flags: Binary format (24-bit)",
    "// Duration: Time with units (ns, us, ms)",
    "// Opcodes: continue, stop, branch, jsr, rts, loop, end_loop, etc.",
    "//",
    "// ================================================================",
)


def _valid_target(inst: Instruction, count: int) -> bool:
    return 0 < inst.data < count


def branch_targets(program: Program) -> Set[int]:
    """Indices referenced by a BRANCH or JSR with an in-range, non-zero target."""
    count = len(program.instructions)
    return {
        inst.data for inst in program.instructions
        if inst.opcode.targets_instruction and _valid_target(inst, count)
    }


def _target_label(inst: Instruction, count: int) -> str:
    # Target 0 and out-of-range targets go back to the start label.
    return f"line{inst.data}" if _valid_target(inst, count) else START_LABEL


def _suffix(inst: Instruction, count: int) -> str:
    op = inst.opcode
    if op is OpCode.BRANCH:
        return f", branch, {_target_label(inst, count)}"
    if op is OpCode.JSR:
        return f", jsr, {_target_label(inst, count)}"
    if op is OpCode.RTS:
        return ", rts"
    if op is OpCode.LOOP:
        return f", loop, {inst.data}"
    if op is OpCode.END_LOOP:
        return ", end_loop"
    if op is OpCode.LONG_DELAY:
        return f", long_delay, {inst.data}"
    if op is OpCode.WAIT:
        return ", wait"
    if op is OpCode.STOP:
        return ", stop"
    # CONTINUE, and opcodes the interpreter has no keyword for
    return ""


def instruction_line(inst: Instruction, index: int, count: int, targets: Set[int]) -> str:
    if index == 0:
        label = f"{START_LABEL}: "
    elif index in targets:
        label = f"line{index}: "
    else:
        label = _BLANK_LABEL

    duration, units = requantize(inst.duration_ns)
    return f"{label}{format_binary(inst.bitmask)}, {format_number(duration)}{units}{_suffix(inst, count)}"


def program_to_assembly(program: Program, generated_at: Optional[datetime] = None) -> str:
    targets = branch_targets(program)
    count = len(program.instructions)

    lines = program_header(program, "Generated PulseBlaster Interpreter program", "//", generated_at)
    lines.extend(_FORMAT_NOTES)
    lines.append("")
    lines.extend(
        instruction_line(inst, index, count, targets)
        for index, inst in enumerate(program.instructions)
    )
    return "\n".join(lines)
