"""
Built-in example programs.

Bit assignments used below: 0 green laser, 2 counter 0, 4 MW1, 6 AWG1.
All durations are nanoseconds.
"""
from typing import Dict, Tuple

from .types import Program


def _inst(id: str, flags: int, opcode: str, duration: int, data: int = 0) -> Dict[str, object]:
    return {"id": id, "flags": flags, "opcode": opcode, "data": data,
            "duration": duration, "units": "ns", "length": duration}


_EXAMPLES = [
    {
        "name": "CW Green Laser",
        "instructions": [
            _inst("cw_1", 0x000001, "CONTINUE", 1_000_000),
            _inst("cw_2", 0x000001, "BRANCH", 1_000_000),
        ],
    },
    {
        "name": "ESR Readout Sequence",
        "instructions": [
            _inst("esr_1", 0x000001, "CONTINUE", 3_000_000),
            _inst("esr_2", 0x000010, "CONTINUE", 1_000_000),
            _inst("esr_3", 0x000005, "CONTINUE", 300_000),
            _inst("esr_4", 0x000000, "STOP", 3_700_000),
        ],
    },
    {
        "name": "Rabi Oscillation",
        "instructions": [
            _inst("rabi_1", 0x000001, "CONTINUE", 3_000_000),
            _inst("rabi_2", 0x000050, "CONTINUE", 50_000),
            _inst("rabi_3", 0x000005, "CONTINUE", 300_000),
            _inst("rabi_4", 0x000000, "STOP", 11_650_000),
        ],
    },
    {
        "name": "Simple Pulse Train",
        "instructions": [
            _inst("ex1_1", 0x000001, "CONTINUE", 1_000_000),
            _inst("ex1_2", 0x000000, "CONTINUE", 1_000_000),
            _inst("ex1_3", 0x000001, "CONTINUE", 1_000_000),
            _inst("ex1_4", 0x000000, "STOP", 7_000_000),
        ],
    },
    {
        "name": "Multi-Channel Sequence",
        "instructions": [
            _inst("ex2_1", 0x000003, "CONTINUE", 2_000_000),
            _inst("ex2_2", 0x00000C, "CONTINUE", 3_000_000),
            _inst("ex2_3", 0x000030, "CONTINUE", 5_000_000),
            _inst("ex2_4", 0x000000, "STOP", 10_000_000),
        ],
    },
    {
        "name": "Loop Example",
        "instructions": [
            _inst("ex3_1", 0x000001, "LOOP", 1_000_000, data=10),
            _inst("ex3_2", 0x000002, "CONTINUE", 500_000),
            _inst("ex3_3", 0x000000, "END_LOOP", 500_000),
            _inst("ex3_4", 0x000000, "STOP", 30_000_000),
        ],
    },
    {
        "name": "Complex Timing",
        "instructions": [
            _inst("ex4_1", 0x00000F, "CONTINUE", 100_000),
            _inst("ex4_2", 0x0000F0, "CONTINUE", 250_000),
            _inst("ex4_3", 0x000F00, "CONTINUE", 500_000),
            _inst("ex4_4", 0x00F000, "CONTINUE", 1_000_000),
            _inst("ex4_5", 0x000000, "STOP", 13_150_000),
        ],
    },
]

EXAMPLE_PROGRAMS: Tuple[Program, ...] = tuple(Program.from_dict(p) for p in _EXAMPLES)


def example_names() -> Tuple[str, ...]:
    return tuple(p.name for p in EXAMPLE_PROGRAMS)


def load_example(name: str) -> Program:
    """Look up a built-in program by name (KeyError if unknown)."""
    for program in EXAMPLE_PROGRAMS:
        if program.name == name:
            return program
    raise KeyError(f"No example program named {name!r}")
