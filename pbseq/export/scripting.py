"""
Export as a script for the ``pulser`` Python library.

Durations are re-expressed in whole ms/us when large enough (see
:func:`pbseq.time_utils.requantize`), which can round away sub-unit
precision. Use the JSON export for an exact copy.
"""
import json

from ..flags import active_indices
from ..time_utils import format_number, requantize
from ..types import DEFAULT_CLOCK_MHZ, MAX_CHANNELS, Instruction, Program

LIBRARY = "pulser"

_PREAMBLE = f"""# Generated pulse program
from {LIBRARY} import PulseBlaster, PBInstruction

# Program instructions
instructions = [
"""

_POSTAMBLE = f"""
]

# Run the program
with PulseBlaster(board=0, core_clock_MHz={DEFAULT_CLOCK_MHZ}) as pb:
    pb.program_pulse_program(instructions)
    pb.start()
    input("Press Enter to stop the program...")
    # Add your timing logic here
    pb.stop()
"""


def _quoted(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def render_flags(flags) -> str:
    """
    Flags as the library's ``flags=`` argument.

    Bitmasks and index lists within the 24 channels become a bracketed index
    list ("[]" when nothing is on). Anything else, including '0'/'1'
    strings, is passed through as a quoted literal.
    """
    if isinstance(flags, int):
        if flags == 0:
            return "[]"
        if flags >> MAX_CHANNELS == 0:
            return f"[{', '.join(str(i) for i in active_indices(flags))}]"
        return _quoted(str(flags))
    if isinstance(flags, tuple):
        if all(0 <= idx < MAX_CHANNELS for idx in flags):
            return f"[{', '.join(str(i) for i in sorted(set(flags)))}]"
        return _quoted(",".join(str(i) for i in flags))
    return _quoted(flags)


def instruction_line(inst: Instruction) -> str:
    duration, units = requantize(inst.duration_ns)
    return (
        f"    PBInstruction(flags={render_flags(inst.flags)}, "
        f'opcode="{inst.opcode.value}", data={inst.data}, '
        f'duration={format_number(duration)}, units="{units}")'
    )


def program_to_python(program: Program) -> str:
    body = ",\n".join(instruction_line(inst) for inst in program.instructions)
    return _PREAMBLE + body + _POSTAMBLE
