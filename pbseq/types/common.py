"""
Core data types for pbseq: opcodes, time units, instructions and programs.

Instructions and programs are immutable. Every edit produces a new value,
so timelines and exports can always be derived fresh from whatever list the
caller currently holds.
"""
import logging
from dataclasses import dataclass, field, fields, replace as dc_replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .errors import InvalidOpcode, InvalidUnit, PulseProgramError

logger = logging.getLogger(__name__)


class TimeUnit(str, Enum):
    """时间单位 (value 为显示符号)"""
    NANOSECOND = "ns"
    MICROSECOND = "μs"
    MILLISECOND = "ms"
    SECOND = "s"

    @property
    def multiplier(self) -> int:
        """Nanoseconds per one unit."""
        return _UNIT_MULTIPLIERS[self]

    @property
    def ascii_symbol(self) -> str:
        return "us" if self is TimeUnit.MICROSECOND else self.value

    @classmethod
    def parse(cls, unit: Union[str, "TimeUnit"]) -> "TimeUnit":
        """
        Resolve a unit symbol.

        ``ns``, ``us``, ``ms`` and ``s`` are matched case-insensitively; the
        micro sign is accepted both as Greek mu and as U+00B5.

        Raises:
            InvalidUnit: if the symbol is not recognized.
        """
        if isinstance(unit, cls):
            return unit
        if not isinstance(unit, str):
            raise InvalidUnit(unit)
        try:
            return _UNIT_ALIASES[unit.strip().lower()]
        except KeyError:
            raise InvalidUnit(unit) from None


_UNIT_MULTIPLIERS = {
    TimeUnit.NANOSECOND: 1,
    TimeUnit.MICROSECOND: 1_000,
    TimeUnit.MILLISECOND: 1_000_000,
    TimeUnit.SECOND: 1_000_000_000,
}

_UNIT_ALIASES = {
    "ns": TimeUnit.NANOSECOND,
    "us": TimeUnit.MICROSECOND,
    "μs": TimeUnit.MICROSECOND,
    "µs": TimeUnit.MICROSECOND,
    "ms": TimeUnit.MILLISECOND,
    "s": TimeUnit.SECOND,
}

# Coarse-to-fine order used by the display helpers.
UNITS_DESCENDING = (
    TimeUnit.SECOND,
    TimeUnit.MILLISECOND,
    TimeUnit.MICROSECOND,
    TimeUnit.NANOSECOND,
)


class OpCode(str, Enum):
    """PulseBlaster 指令操作码"""
    CONTINUE = "CONTINUE"
    STOP = "STOP"
    LOOP = "LOOP"
    END_LOOP = "END_LOOP"
    JSR = "JSR"
    RTS = "RTS"
    BRANCH = "BRANCH"
    LONG_DELAY = "LONG_DELAY"
    WAIT = "WAIT"
    RTI = "RTI"

    @classmethod
    def parse(cls, opcode: Union[str, "OpCode"]) -> "OpCode":
        """Case-insensitive lookup of an opcode name."""
        if isinstance(opcode, cls):
            return opcode
        if not isinstance(opcode, str):
            raise InvalidOpcode(opcode)
        try:
            return cls[opcode.strip().upper()]
        except KeyError:
            raise InvalidOpcode(opcode) from None

    @property
    def targets_instruction(self) -> bool:
        """True when ``data`` holds an instruction index."""
        return self in (OpCode.BRANCH, OpCode.JSR)


# Opaque DDS parameters carried through export untouched.
ANALOG_FIELDS = (
    "freq0", "phase0", "amp0", "dds_en0", "phase_reset0",
    "freq1", "phase1", "amp1", "dds_en1", "phase_reset1",
)

FlagsValue = Union[int, str, Tuple[int, ...]]


@dataclass(frozen=True)
class Instruction:
    """
    One step of a pulse program.

    ``flags`` keeps whichever shape it was authored in (bitmask, '0'/'1'
    string with channel 0 first, or a tuple of channel indices); use
    :attr:`bitmask` when an integer is needed. ``duration`` is a magnitude
    in ``units``; :attr:`duration_ns` is the canonical value.
    """
    flags: FlagsValue
    opcode: OpCode
    data: int = 0
    duration: Union[int, float] = 0
    units: str = "ns"
    id: Optional[str] = None
    length: Optional[Union[int, float]] = None
    display_time_scale: Optional[str] = None

    freq0: Optional[Any] = None
    phase0: Optional[Any] = None
    amp0: Optional[Any] = None
    dds_en0: Optional[Any] = None
    phase_reset0: Optional[Any] = None
    freq1: Optional[Any] = None
    phase1: Optional[Any] = None
    amp1: Optional[Any] = None
    dds_en1: Optional[Any] = None
    phase_reset1: Optional[Any] = None

    def __post_init__(self):
        from ..flags import validate_flags

        if isinstance(self.flags, list):
            object.__setattr__(self, "flags", tuple(self.flags))
        validate_flags(self.flags)

        object.__setattr__(self, "opcode", OpCode.parse(self.opcode))

        if isinstance(self.units, TimeUnit):
            object.__setattr__(self, "units", self.units.value)
        TimeUnit.parse(self.units)

        if isinstance(self.duration, bool) or not isinstance(self.duration, (int, float)):
            raise PulseProgramError(f"Duration must be a number, got {self.duration!r}")
        if self.duration < 0:
            raise PulseProgramError(f"Duration must be non-negative, got {self.duration}")
        if isinstance(self.data, bool) or not isinstance(self.data, int):
            raise PulseProgramError(f"Data operand must be an integer, got {self.data!r}")

    @property
    def time_unit(self) -> TimeUnit:
        return TimeUnit.parse(self.units)

    @property
    def duration_ns(self) -> Union[int, float]:
        """Duration in nanoseconds."""
        from ..time_utils import to_nanoseconds
        return to_nanoseconds(self.duration, self.time_unit)

    @property
    def bitmask(self) -> int:
        """Flags folded into an integer bitmask (bit i = channel i)."""
        from ..flags import to_bitmask
        return to_bitmask(self.flags)

    @property
    def analog(self) -> Dict[str, Any]:
        """The DDS parameters that are set on this instruction."""
        return {name: getattr(self, name) for name in ANALOG_FIELDS
                if getattr(self, name) is not None}

    def replace(self, **changes) -> "Instruction":
        """Return a copy with ``changes`` applied."""
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Exchange-format dictionary; unset optional fields are omitted."""
        out: Dict[str, Any] = {}
        if self.id is not None:
            out["id"] = self.id
        out["flags"] = list(self.flags) if isinstance(self.flags, tuple) else self.flags
        out["opcode"] = self.opcode.value
        out["data"] = self.data
        out["duration"] = self.duration
        out["units"] = self.units
        if self.length is not None:
            out["length"] = self.length
        if self.display_time_scale is not None:
            out["displayTimeScale"] = self.display_time_scale
        out.update(self.analog)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], index: Optional[int] = None) -> "Instruction":
        where = f"Instruction {index}" if index is not None else "Instruction"
        if not isinstance(data, Mapping):
            raise PulseProgramError(f"{where}: expected an object, got {type(data).__name__}")
        for key in ("flags", "opcode", "duration"):
            if key not in data:
                raise PulseProgramError(f"{where}: missing field '{key}'")

        known = {f.name for f in fields(cls)} | {"displayTimeScale"}
        unknown = set(data) - known
        if unknown:
            logger.debug("%s: ignoring unknown fields %s", where, sorted(unknown))

        kwargs = {
            "flags": data["flags"],
            "opcode": data["opcode"],
            "data": data.get("data", 0),
            "duration": data["duration"],
            "units": data.get("units", "ns"),
            "id": data.get("id"),
            "length": data.get("length"),
            "display_time_scale": data.get("displayTimeScale"),
        }
        for name in ANALOG_FIELDS:
            kwargs[name] = data.get(name)
        return cls(**kwargs)


@dataclass(frozen=True)
class Program:
    """A named, ordered sequence of instructions."""
    name: str = "Untitled Program"
    instructions: Tuple[Instruction, ...] = field(default_factory=tuple)
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.instructions, tuple):
            object.__setattr__(self, "instructions", tuple(self.instructions))
        for i, inst in enumerate(self.instructions):
            if not isinstance(inst, Instruction):
                raise TypeError(f"Program instruction {i} is {type(inst).__name__}, not Instruction")

    @property
    def total_length(self) -> Union[int, float]:
        """Sum of all instruction durations in nanoseconds."""
        return sum(inst.duration_ns for inst in self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            out["description"] = self.description
        out["totalLength"] = self.total_length
        out["instructions"] = [inst.to_dict() for inst in self.instructions]
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Program":
        """Build a program from the exchange format. ``totalLength`` is recomputed, not read."""
        if not isinstance(data, Mapping):
            raise PulseProgramError(f"Program must be an object, got {type(data).__name__}")
        raw = data.get("instructions")
        if not isinstance(raw, list):
            raise PulseProgramError("Program is missing its 'instructions' list")
        instructions = tuple(Instruction.from_dict(item, i) for i, item in enumerate(raw))
        return cls(
            name=data.get("name", "Untitled Program"),
            instructions=instructions,
            description=data.get("description"),
        )


@dataclass(frozen=True)
class TimelineSegment:
    """时间轴片段 - 一条指令在绝对时间上的位置和通道状态"""
    index: int
    start_time: Union[int, float]
    duration: Union[int, float]
    flags: Tuple[bool, ...]
    opcode: OpCode
    instruction: Instruction

    @property
    def end_time(self) -> Union[int, float]:
        return self.start_time + self.duration

    def is_active(self, channel: int) -> bool:
        return 0 <= channel < len(self.flags) and self.flags[channel]
