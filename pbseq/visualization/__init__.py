"""
pbseq Visualization Module

Provides functions for rendering pulse program timelines.
"""

from .timeline import (
    channel_color,
    plot_timeline,
    scaled_segments,
    text_timeline,
)

__all__ = [
    'channel_color',
    'plot_timeline',
    'scaled_segments',
    'text_timeline',
]
