from datetime import datetime

import pytest

from pbseq.export import branch_targets, program_to_assembly
from pbseq.types import Program
from tests.helpers import make_inst

ZEROS = "0" * 24
BANNER = "// " + "=" * 64


def body(text):
    """Instruction lines, i.e. everything after the banner."""
    return text.split(BANNER, 1)[1].strip("\n").splitlines()


def test_branch_target_gets_label(branch_program):
    assert body(program_to_assembly(branch_program)) == [
        f"start: 0b{ZEROS[:-1]}1, 1us, branch, line2",
        f"       0b{ZEROS[:-2]}10, 2us",
        f"line2: 0b{ZEROS}, 3us, stop",
    ]


def test_branch_targets_ignore_zero_and_out_of_range():
    program = Program(name="p", instructions=(
        make_inst(opcode="BRANCH", data=0),
        make_inst(opcode="JSR", data=3),
        make_inst(opcode="JSR", data=9),
        make_inst(opcode="LOOP", data=1),
        make_inst(opcode="RTS"),
    ))
    assert branch_targets(program) == {3}
    lines = body(program_to_assembly(program))
    assert lines[0].endswith(", branch, start")
    assert lines[1].endswith(", jsr, line3")
    assert lines[2].endswith(", jsr, start")
    assert lines[3].startswith("line3: ")
    assert lines[3].endswith(", loop, 1")
    assert lines[4].endswith(", rts")


@pytest.mark.parametrize("opcode, data, suffix", [
    ("CONTINUE", 0, ""),
    ("STOP", 0, ", stop"),
    ("WAIT", 0, ", wait"),
    ("END_LOOP", 0, ", end_loop"),
    ("LONG_DELAY", 5, ", long_delay, 5"),
    ("LOOP", 12, ", loop, 12"),
    ("RTI", 0, ""),
])
def test_opcode_suffixes(opcode, data, suffix):
    program = Program(name="p", instructions=(make_inst(opcode=opcode, data=data, duration=10),))
    assert body(program_to_assembly(program)) == [f"start: 0b{ZEROS}, 10ns{suffix}"]


def test_durations_are_requantized():
    program = Program(name="p", instructions=(
        make_inst(duration=1_500), make_inst(duration=2.5, units="ms"), make_inst(duration=7),
    ))
    lines = body(program_to_assembly(program))
    assert lines[0].endswith(", 2us")
    assert lines[1].endswith(", 3ms")
    assert lines[2].endswith(", 7ns")


def test_header(branch_program):
    lines = program_to_assembly(branch_program, generated_at=datetime(2025, 5, 6)).splitlines()
    assert lines[:4] == [
        "// Generated PulseBlaster Interpreter program",
        "// Program: Branch",
        "// Generated on: 2025-05-06T00:00:00",
        "// Total Instructions: 3",
    ]
    assert "// Flags: Binary format (24-bit)" in lines


def test_flags_from_string_are_normalized():
    program = Program(name="p", instructions=(make_inst(flags="11"),))
    assert body(program_to_assembly(program))[0].startswith(f"start: 0b{ZEROS[:-2]}11,")


def test_empty_program():
    text = program_to_assembly(Program(name=""))
    assert "// Program: Untitled" in text
    assert body(text) == []
