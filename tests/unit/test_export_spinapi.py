from datetime import datetime

import pytest

from pbseq.export import program_to_spinapi
from pbseq.export.spinapi import OPCODE_SYMBOLS, opcode_symbol
from pbseq.types import OpCode, Program
from tests.helpers import make_inst


def test_header_without_timestamp(two_step_program):
    lines = program_to_spinapi(two_step_program).splitlines()
    assert lines[:4] == [
        "# Generated SpinAPI Python program",
        "# Program: Two Step",
        "# Total Instructions: 2",
        "",
    ]
    assert not any(line.startswith("# Generated on") for line in lines)


def test_header_with_timestamp(two_step_program):
    text = program_to_spinapi(two_step_program, generated_at=datetime(2024, 1, 2, 3, 4, 5))
    assert "# Generated on: 2024-01-02T03:04:05\n# Total Instructions: 2" in text


def test_untitled_program():
    assert "# Program: Untitled" in program_to_spinapi(Program(name=""))


def test_instruction_lines(two_step_program):
    text = program_to_spinapi(two_step_program)
    assert "    pb.pb_inst_pbonly(0x000001, pb.CONTINUE, 0, 1000000 * pb.ns)\n" in text
    assert "    pb.pb_inst_pbonly(0x000000, pb.STOP, 0, 5000000 * pb.ns)\n" in text


def test_duration_is_not_requantized():
    program = Program(name="p", instructions=(make_inst(duration=1.5, units="us"),))
    assert "1500 * pb.ns)" in program_to_spinapi(program)


def test_duration_has_no_float_noise():
    program = Program(name="p", instructions=(make_inst(flags=1, opcode="STOP", duration=1.005, units="us"),))
    text = program_to_spinapi(program)
    assert "    pb.pb_inst_pbonly(0x000001, pb.STOP, 0, 1005 * pb.ns)\n" in text


def test_non_integer_flags_are_normalized_to_hex():
    program = Program(name="p", instructions=(
        make_inst(flags="0001"), make_inst(flags=[0, 23]),
    ))
    text = program_to_spinapi(program)
    assert "pb_inst_pbonly(0x000008," in text
    assert "pb_inst_pbonly(0x800001," in text


def test_boilerplate(two_step_program):
    text = program_to_spinapi(two_step_program, clock_mhz=100.0)
    for fragment in (
        "import spinapi as pb",
        "clock_freq = 100.0",
        "pb.pb_init()",
        "pb.pb_core_clock(clock_freq)",
        "pb.pb_start_programming(pb.PULSE_PROGRAM)",
        "pb.pb_stop_programming()",
        "pb.pb_start()",
        "status = pb.pb_read_status()",
        'print("\\nStopping pulse program...")',
        'print(f"Error: {e}")',
        "pb.pb_close()",
    ):
        assert fragment in text
    assert text.index("pb_start_programming") < text.index("pb_inst_pbonly") < text.index("pb_stop_programming")


@pytest.mark.parametrize("opcode", [op for op in OpCode if op is not OpCode.RTI])
def test_opcode_table(opcode):
    assert opcode_symbol(opcode) == f"pb.{opcode.value}"


def test_unmapped_opcode_defaults_to_continue():
    assert OpCode.RTI not in OPCODE_SYMBOLS
    program = Program(name="p", instructions=(make_inst(opcode="RTI"),))
    assert "pb.CONTINUE, 0, 1000 * pb.ns" in program_to_spinapi(program)
