"""
Exception types raised by the pbseq core.

All of them derive from ``ValueError`` so callers that only care about
"bad input" can catch the builtin.
"""


class PulseProgramError(ValueError):
    """Base class for malformed pulse program input."""


class InvalidUnit(PulseProgramError):
    """A time unit symbol outside ns/us/μs/ms/s."""

    def __init__(self, unit):
        self.unit = unit
        super().__init__(f"Invalid time unit: {unit!r}")


class InvalidOpcode(PulseProgramError):
    """An opcode name outside the PulseBlaster instruction set."""

    def __init__(self, opcode):
        self.opcode = opcode
        super().__init__(f"Invalid opcode: {opcode!r}")


class InvalidFlags(PulseProgramError):
    """A flags value that is not an int, a '0'/'1' string or an index list."""
