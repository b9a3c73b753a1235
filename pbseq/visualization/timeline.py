"""
Timeline rendering for pulse programs.

Both views are built from :func:`pbseq.timeline.build_timeline` output: a
matplotlib plot with one row per channel, and a compact text view.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from ..time_utils import format_in_scale, format_nanoseconds, format_total
from ..timeline import InstructionsLike, build_timeline, channel_intervals
from ..types import OpCode, TimelineSegment, VisualizationSettings

logger = logging.getLogger(__name__)

CHANNEL_COLORS = (
    'tab:blue', 'tab:green', 'tab:red', 'gold', 'tab:purple', 'tab:pink',
    'indigo', 'teal', 'tab:orange', 'tab:cyan', 'limegreen', 'goldenrod',
    'mediumseagreen', 'blueviolet', 'crimson', 'deepskyblue', 'fuchsia',
    'slategray', 'tab:gray', 'dimgray', 'rosybrown', 'darkslategray',
    'firebrick', 'navy',
)


def channel_color(channel: int) -> str:
    return CHANNEL_COLORS[channel % len(CHANNEL_COLORS)]


# ==============================================================================
# MATPLOTLIB VIEW
# ==============================================================================

def plot_timeline(instructions: InstructionsLike,
                  settings: Optional[VisualizationSettings] = None,
                  figsize: Tuple[int, int] = (15, 6),
                  filename: Optional[str] = None) -> Tuple[plt.Figure, plt.Axes]:
    """使用 matplotlib 绘制通道时间轴"""
    settings = settings or VisualizationSettings()
    segments = build_timeline(instructions, settings.channel_count)
    unit = settings.time_scale
    total_ns = segments[-1].end_time if segments else 0

    fig, ax = plt.subplots(figsize=figsize)

    if not segments:
        ax.text(0.5, 0.5, 'Empty Program\nDuration: 0 ns',
                ha='center', va='center', transform=ax.transAxes)
        return fig, ax

    scale = float(unit.multiplier)
    for channel in range(settings.channel_count):
        spans = [(start / scale, (end - start) / scale)
                 for start, end in channel_intervals(segments, channel)]
        if spans:
            ax.broken_barh(spans, (channel - 0.4, 0.8),
                           facecolors=channel_color(channel), alpha=0.8)

    if settings.show_timing:
        _draw_segment_boundaries(ax, segments, scale)
    if settings.show_opcode:
        _draw_opcode_labels(ax, segments, scale)

    ax.set_yticks(range(settings.channel_count))
    ax.set_yticklabels([f"CH{ch}" for ch in range(settings.channel_count)])
    ax.set_ylim(-0.5 - (1 if settings.show_opcode else 0), settings.channel_count - 0.5)
    ax.set_xlim(0, max(total_ns / scale, np.finfo(float).eps))
    ax.set_xlabel(f"Time ({unit.value})")
    _setup_plot_aesthetics(ax, format_total(total_ns, unit))

    if filename:
        fig.savefig(filename, dpi=300, bbox_inches='tight')
        logger.info("Timeline plot saved to %s", filename)

    return fig, ax


def _draw_segment_boundaries(ax: plt.Axes, segments: Sequence[TimelineSegment], scale: float):
    boundaries = np.array([seg.start_time for seg in segments] + [segments[-1].end_time],
                          dtype=float) / scale
    for x in np.unique(boundaries):
        ax.axvline(x=x, color='lightgray', linestyle='--', linewidth=0.8, zorder=0)


def _draw_opcode_labels(ax: plt.Axes, segments: Sequence[TimelineSegment], scale: float):
    # Labels sit in a band above channel 0 (the y axis is inverted).
    for seg in segments:
        if seg.opcode is OpCode.CONTINUE:
            continue
        label = seg.opcode.value
        if seg.opcode in (OpCode.LOOP, OpCode.LONG_DELAY, OpCode.BRANCH, OpCode.JSR):
            label += f" {seg.instruction.data}"
        center = (seg.start_time + seg.duration / 2) / scale
        ax.text(center, -1, label, ha='center', va='center', fontsize=7,
                fontweight='bold', color='dimgray')


def _setup_plot_aesthetics(ax: plt.Axes, total_text: str):
    ax.set_title(f'Pulse Program Timeline (Total Duration: {total_text})')
    ax.grid(True, which='major', axis='x', linestyle='--', linewidth=0.5)
    ax.invert_yaxis()  # CH0 at the top


# ==============================================================================
# TEXT VIEW
# ==============================================================================

def text_timeline(instructions: InstructionsLike, channel_count: int = 8,
                  max_width: int = 100) -> str:
    """生成文本形式的时间轴"""
    segments = build_timeline(instructions, channel_count)
    if not segments:
        return "Empty Program (0 ns)"

    total_ns = segments[-1].end_time
    lines = [
        f"Timeline View (Total Duration: {format_nanoseconds(total_ns)})",
        "=" * min(max_width, 80),
    ]

    steps = " → ".join(
        f"t={format_nanoseconds(seg.start_time)}:{seg.opcode.value}" for seg in segments
    )
    lines.append(f"{'OPCODE':<8} │ {steps}")

    for channel in range(channel_count):
        intervals = channel_intervals(segments, channel)
        if not intervals:
            continue
        pulses = " → ".join(
            f"t={format_nanoseconds(start)}:HIGH[{format_nanoseconds(end - start)}]"
            for start, end in intervals
        )
        lines.append(f"{'CH' + str(channel):<8} │ {pulses}")

    return "\n".join(lines)


def scaled_segments(instructions: InstructionsLike,
                    settings: Optional[VisualizationSettings] = None) -> List[Dict[str, object]]:
    """Segment geometry in display units and pixels, for external renderers."""
    settings = settings or VisualizationSettings()
    unit = settings.time_scale
    rows = []
    for seg in build_timeline(instructions, settings.channel_count):
        start = seg.start_time / unit.multiplier
        width = seg.duration / unit.multiplier
        rows.append({
            'index': seg.index,
            'start': start,
            'duration': width,
            'left_px': start * settings.horizontal_scale,
            'width_px': width * settings.horizontal_scale,
            'label': format_in_scale(seg.duration, unit),
            'opcode': seg.opcode.value,
            'flags': seg.flags,
        })
    return rows
