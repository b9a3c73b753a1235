"""
Timeline construction for pulse programs.

Instructions are laid end to end: each one starts when the previous one
ends. Control-flow opcodes (LOOP, BRANCH, JSR, ...) are carried on the
segments but never interpreted, so the timeline is always a single linear
pass through the program as written.
"""
import logging
from collections import Counter
from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np

from .flags import decode_flags
from .types import Instruction, Program, TimelineSegment
from .types.settings import MAX_CHANNELS

logger = logging.getLogger(__name__)

InstructionsLike = Union[Program, Sequence[Instruction]]


def _instructions_of(source: InstructionsLike) -> Sequence[Instruction]:
    return source.instructions if isinstance(source, Program) else source


def build_timeline(instructions: InstructionsLike,
                   channel_count: int = MAX_CHANNELS) -> List[TimelineSegment]:
    """
    Position every instruction on an absolute time axis.

    Args:
        instructions: Program or instruction sequence
        channel_count: Number of channels resolved per segment

    Returns:
        One segment per instruction, in order. Segment i starts at the sum
        of the durations of instructions 0..i-1 (nanoseconds).
    """
    segments = []
    current_time = 0
    for index, inst in enumerate(_instructions_of(instructions)):
        duration = inst.duration_ns
        segments.append(TimelineSegment(
            index=index,
            start_time=current_time,
            duration=duration,
            flags=tuple(decode_flags(inst.flags, channel_count)),
            opcode=inst.opcode,
            instruction=inst,
        ))
        current_time += duration

    logger.debug("Built timeline: %d segments, %s ns total", len(segments), current_time)
    return segments


def total_duration(instructions: InstructionsLike) -> Union[int, float]:
    """Total program time in nanoseconds (0 for an empty program)."""
    return sum(inst.duration_ns for inst in _instructions_of(instructions))


def channel_states_at(segments: Sequence[TimelineSegment], time_ns: float,
                      channel_count: int = MAX_CHANNELS) -> List[bool]:
    """Channel states at an instant.

    The segment covering ``start <= time_ns < end`` wins; outside the
    program every channel is off.
    """
    for seg in segments:
        if seg.start_time <= time_ns < seg.end_time:
            states = list(seg.flags[:channel_count])
            return states + [False] * (channel_count - len(states))
    return [False] * channel_count


def activation_matrix(segments: Sequence[TimelineSegment],
                      channel_count: int = MAX_CHANNELS) -> np.ndarray:
    """Boolean array of shape (segments, channels)."""
    matrix = np.zeros((len(segments), channel_count), dtype=bool)
    for row, seg in enumerate(segments):
        width = min(channel_count, len(seg.flags))
        matrix[row, :width] = seg.flags[:width]
    return matrix


def channel_intervals(segments: Sequence[TimelineSegment],
                      channel: int) -> List[Tuple[Union[int, float], Union[int, float]]]:
    """
    Time intervals during which ``channel`` is high.

    Adjacent segments that both drive the channel merge into one interval;
    zero-length segments never open an interval.
    """
    intervals = []
    for seg in segments:
        if seg.duration <= 0 or not seg.is_active(channel):
            continue
        if intervals and intervals[-1][1] == seg.start_time:
            intervals[-1] = (intervals[-1][0], seg.end_time)
        else:
            intervals.append((seg.start_time, seg.end_time))
    return intervals


def analyze_timing(instructions: InstructionsLike,
                   channel_count: int = MAX_CHANNELS) -> Dict[str, Any]:
    """Summary statistics for a program's linear timeline."""
    segments = build_timeline(instructions, channel_count)
    total = segments[-1].end_time if segments else 0

    matrix = activation_matrix(segments, channel_count)
    durations = np.array([seg.duration for seg in segments], dtype=float)
    high_time = matrix.T.astype(float) @ durations if segments else np.zeros(channel_count)

    active = [ch for ch in range(channel_count) if matrix[:, ch].any()]
    return {
        'total_duration_ns': total,
        'instruction_count': len(segments),
        'active_channels': active,
        'channel_high_time_ns': {ch: float(high_time[ch]) for ch in active},
        'channel_duty_cycle': {
            ch: (float(high_time[ch]) / total if total > 0 else 0.0) for ch in active
        },
        'opcode_counts': dict(Counter(seg.opcode.value for seg in segments)),
        'shortest_ns': float(durations.min()) if segments else 0.0,
        'longest_ns': float(durations.max()) if segments else 0.0,
    }
