"""
Type definitions for pbseq.
"""
from .common import (
    ANALOG_FIELDS,
    UNITS_DESCENDING,
    Instruction,
    OpCode,
    Program,
    TimelineSegment,
    TimeUnit,
)
from .errors import InvalidFlags, InvalidOpcode, InvalidUnit, PulseProgramError
from .settings import (
    DEFAULT_CHANNEL_COUNT,
    DEFAULT_CLOCK_MHZ,
    MAX_CHANNELS,
    VisualizationSettings,
)

__all__ = [
    'ANALOG_FIELDS',
    'UNITS_DESCENDING',
    'Instruction',
    'OpCode',
    'Program',
    'TimelineSegment',
    'TimeUnit',
    'InvalidFlags',
    'InvalidOpcode',
    'InvalidUnit',
    'PulseProgramError',
    'DEFAULT_CHANNEL_COUNT',
    'DEFAULT_CLOCK_MHZ',
    'MAX_CHANNELS',
    'VisualizationSettings',
]
