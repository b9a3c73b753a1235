# tests/conftest.py
import matplotlib
import pytest

from pbseq.types import Program
from tests.helpers import make_inst

# Plot tests must not need a display.
matplotlib.use("Agg")


@pytest.fixture
def two_step_instructions():
    """1 ms with channel 0 on, then 5 ms all off and STOP."""
    return (
        make_inst(flags=1, opcode="CONTINUE", duration=1_000_000),
        make_inst(flags=0, opcode="STOP", duration=5_000_000),
    )


@pytest.fixture
def two_step_program(two_step_instructions):
    return Program(name="Two Step", instructions=two_step_instructions)


@pytest.fixture
def branch_program():
    return Program(name="Branch", instructions=(
        make_inst(flags=0b1, opcode="BRANCH", data=2, duration=1_000),
        make_inst(flags=0b10, opcode="CONTINUE", duration=2_000),
        make_inst(flags=0, opcode="STOP", duration=3_000),
    ))


@pytest.fixture
def analog_instruction():
    return make_inst(
        flags=[0, 3], opcode="CONTINUE", duration=2.5, units="us", id="dds_1",
        freq0=10.5, phase0=90, amp0=0.8, dds_en0=1, phase_reset0=0,
        freq1=20.0, phase1=0, amp1=0.5, dds_en1=0, phase_reset1=1,
    )
