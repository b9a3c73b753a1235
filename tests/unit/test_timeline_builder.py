import numpy as np
import pytest

from pbseq.timeline import (
    activation_matrix,
    analyze_timing,
    build_timeline,
    channel_intervals,
    channel_states_at,
    total_duration,
)
from pbseq.types import OpCode, Program
from tests.helpers import make_inst


def test_two_step_program_segments(two_step_instructions):
    segments = build_timeline(two_step_instructions, channel_count=8)

    assert len(segments) == 2
    first, second = segments
    assert first.start_time == 0
    assert first.duration == 1_000_000
    assert first.flags == (True,) + (False,) * 7
    assert first.opcode is OpCode.CONTINUE
    assert first.instruction is two_step_instructions[0]

    assert second.start_time == 1_000_000
    assert second.duration == 5_000_000
    assert second.flags == (False,) * 8
    assert second.opcode is OpCode.STOP

    assert total_duration(two_step_instructions) == 6_000_000
    assert second.end_time == 6_000_000


def test_start_times_are_running_sums():
    insts = [
        make_inst(duration=3, units="us"),
        make_inst(duration=0),
        make_inst(duration=250, units="ns"),
        make_inst(duration=1.5, units="ms"),
        make_inst(duration=2, units="s"),
    ]
    segments = build_timeline(insts, channel_count=4)

    assert len(segments) == len(insts)
    running = 0
    for seg, inst in zip(segments, insts):
        assert seg.start_time == running
        assert seg.duration == inst.duration_ns
        running += inst.duration_ns
    assert total_duration(insts) == running == segments[-1].end_time


def test_empty_program_has_no_segments_and_zero_duration():
    assert build_timeline([], 8) == []
    assert total_duration([]) == 0


def test_accepts_program(two_step_program):
    assert len(build_timeline(two_step_program, 4)) == 2
    assert total_duration(two_step_program) == two_step_program.total_length


def test_control_flow_is_not_interpreted():
    insts = [
        make_inst(opcode="LOOP", data=5, duration=100),
        make_inst(opcode="END_LOOP", duration=100),
        make_inst(opcode="BRANCH", data=0, duration=100),
    ]
    segments = build_timeline(insts, 2)
    assert [seg.start_time for seg in segments] == [0, 100, 200]
    assert total_duration(insts) == 300


def test_mixed_flag_shapes_resolve_per_segment():
    insts = [make_inst(flags=0b10), make_inst(flags="01"), make_inst(flags=[1])]
    segments = build_timeline(insts, 2)
    assert all(seg.flags == (False, True) for seg in segments)


def test_timeline_is_recomputed_fresh(two_step_instructions):
    assert build_timeline(two_step_instructions, 8) == build_timeline(two_step_instructions, 8)
    assert build_timeline(two_step_instructions, 8) is not build_timeline(two_step_instructions, 8)


def test_channel_states_at(two_step_instructions):
    segments = build_timeline(two_step_instructions, 4)
    assert channel_states_at(segments, 0, 4) == [True, False, False, False]
    assert channel_states_at(segments, 999_999, 4) == [True, False, False, False]
    assert channel_states_at(segments, 1_000_000, 4) == [False] * 4
    assert channel_states_at(segments, 6_000_000, 4) == [False] * 4
    assert channel_states_at(segments, -1, 4) == [False] * 4


def test_channel_states_skip_zero_length_segments():
    insts = [make_inst(flags=0b1, duration=0), make_inst(flags=0b10, duration=10)]
    segments = build_timeline(insts, 2)
    assert channel_states_at(segments, 0, 2) == [False, True]


def test_activation_matrix_shape_and_values():
    insts = [make_inst(flags=0b01), make_inst(flags=0b11), make_inst(flags=0)]
    matrix = activation_matrix(build_timeline(insts, 3), 3)
    assert matrix.dtype == bool
    assert matrix.shape == (3, 3)
    np.testing.assert_array_equal(matrix, [[1, 0, 0], [1, 1, 0], [0, 0, 0]])


def test_channel_intervals_merge_adjacent_segments():
    insts = [
        make_inst(flags=0b1, duration=10),
        make_inst(flags=0b1, duration=20),
        make_inst(flags=0b0, duration=5),
        make_inst(flags=0b1, duration=0),
        make_inst(flags=0b1, duration=7),
    ]
    segments = build_timeline(insts, 1)
    assert channel_intervals(segments, 0) == [(0, 30), (35, 42)]
    assert channel_intervals(segments, 3) == []


def test_analyze_timing():
    program = Program(name="stats", instructions=(
        make_inst(flags=0b01, opcode="CONTINUE", duration=1, units="ms"),
        make_inst(flags=0b11, opcode="CONTINUE", duration=3, units="ms"),
        make_inst(flags=0, opcode="STOP", duration=4, units="ms"),
    ))
    info = analyze_timing(program, channel_count=4)

    assert info['total_duration_ns'] == 8_000_000
    assert info['instruction_count'] == 3
    assert info['active_channels'] == [0, 1]
    assert info['channel_high_time_ns'] == {0: 4_000_000.0, 1: 3_000_000.0}
    assert info['channel_duty_cycle'][0] == pytest.approx(0.5)
    assert info['opcode_counts'] == {'CONTINUE': 2, 'STOP': 1}
    assert info['shortest_ns'] == 1_000_000.0
    assert info['longest_ns'] == 4_000_000.0


def test_analyze_timing_empty():
    info = analyze_timing([], channel_count=4)
    assert info['total_duration_ns'] == 0
    assert info['active_channels'] == []
    assert info['opcode_counts'] == {}
