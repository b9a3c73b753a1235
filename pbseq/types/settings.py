"""
Visualization configuration consumed by the timeline and plotting helpers.
"""
from dataclasses import dataclass
from typing import Union

from .common import TimeUnit

MAX_CHANNELS = 24
DEFAULT_CHANNEL_COUNT = 8
DEFAULT_HORIZONTAL_SCALE = 200.0  # pixels per time unit
DEFAULT_CLOCK_MHZ = 500.0


@dataclass(frozen=True)
class VisualizationSettings:
    """可视化设置"""
    channel_count: int = DEFAULT_CHANNEL_COUNT
    time_scale: Union[TimeUnit, str] = TimeUnit.MICROSECOND
    horizontal_scale: float = DEFAULT_HORIZONTAL_SCALE
    show_timing: bool = True
    show_opcode: bool = True

    def __post_init__(self):
        if isinstance(self.channel_count, bool) or not isinstance(self.channel_count, int):
            raise ValueError(f"Channel count must be an integer, got {self.channel_count!r}")
        if not 1 <= self.channel_count <= MAX_CHANNELS:
            raise ValueError(
                f"Channel count must be between 1 and {MAX_CHANNELS}, got {self.channel_count}"
            )
        object.__setattr__(self, "time_scale", TimeUnit.parse(self.time_scale))
        if self.horizontal_scale <= 0:
            raise ValueError(f"Horizontal scale must be positive, got {self.horizontal_scale}")
