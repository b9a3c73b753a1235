"""
pbseq: PulseBlaster pulse program construction and export

Builds timed, multi-channel instruction sequences for a SpinCore
PulseBlaster-style delay generator, lays them out on a timeline, checks
them for structural issues and exports them as JSON, a ``pulser`` script,
a SpinAPI script or an interpreter assembly listing.

Core pieces:
- time_utils: unit conversion to and from nanoseconds
- flags: channel bitmask codec
- timeline: absolute-time segments and channel state
- validation: advisory warnings
- export: the four text codecs
"""

# Core types
from .types import (
    Instruction,
    InvalidFlags,
    InvalidOpcode,
    InvalidUnit,
    OpCode,
    Program,
    PulseProgramError,
    TimelineSegment,
    TimeUnit,
    VisualizationSettings,
)

# Time utilities
from .time_utils import (
    format_in_scale,
    format_nanoseconds,
    parse_in_scale,
    pick_optimal_unit,
    to_nanoseconds,
)

# Flag codec
from .flags import decode_flags, encode_bitmask, parse_typed_list, toggle_bit

# Timeline and validation
from .timeline import analyze_timing, build_timeline, total_duration
from .validation import validate_program

# Export
from .export import ExportFormat, export_program, program_from_json

__version__ = "0.1.0"

__all__ = [
    # Core types
    'Instruction',
    'InvalidFlags',
    'InvalidOpcode',
    'InvalidUnit',
    'OpCode',
    'Program',
    'PulseProgramError',
    'TimelineSegment',
    'TimeUnit',
    'VisualizationSettings',

    # Time utilities
    'format_in_scale',
    'format_nanoseconds',
    'parse_in_scale',
    'pick_optimal_unit',
    'to_nanoseconds',

    # Flag codec
    'decode_flags',
    'encode_bitmask',
    'parse_typed_list',
    'toggle_bit',

    # Timeline and validation
    'analyze_timing',
    'build_timeline',
    'total_duration',
    'validate_program',

    # Export
    'ExportFormat',
    'export_program',
    'program_from_json',
]
