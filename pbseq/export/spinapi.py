"""
Export as a SpinAPI (vendor ``spinapi`` module) Python program.

Flags become a hex literal, durations stay in nanoseconds and are scaled by
``pb.ns``, opcodes map to the SpinAPI constants.
"""
from datetime import datetime
from typing import Optional

from ..flags import format_hex
from ..time_utils import format_number
from ..types import DEFAULT_CLOCK_MHZ, Instruction, OpCode, Program
from .common import program_header

# RTI has no pb_inst_pbonly constant; it and anything unmapped fall back to CONTINUE.
OPCODE_SYMBOLS = {
    OpCode.CONTINUE: "pb.CONTINUE",
    OpCode.STOP: "pb.STOP",
    OpCode.LOOP: "pb.LOOP",
    OpCode.END_LOOP: "pb.END_LOOP",
    OpCode.JSR: "pb.JSR",
    OpCode.RTS: "pb.RTS",
    OpCode.BRANCH: "pb.BRANCH",
    OpCode.LONG_DELAY: "pb.LONG_DELAY",
    OpCode.WAIT: "pb.WAIT",
}
DEFAULT_SYMBOL = OPCODE_SYMBOLS[OpCode.CONTINUE]

_PREAMBLE = """
import spinapi as pb
import time

# Initialize PulseBlaster
board_num = 0  # Board number (usually 0)
clock_freq = {clock}  # Clock frequency in MHz

try:
    # Initialize the board
    if pb.pb_init() != 0:
        raise Exception("Failed to initialize PulseBlaster board")

    # Set clock frequency
    pb.pb_core_clock(clock_freq)

    # Program the pulse sequence
    pb.pb_start_programming(pb.PULSE_PROGRAM)

    # Add instructions
"""

_POSTAMBLE = """

    # Stop programming
    pb.pb_stop_programming()

    # Start the pulse program
    pb.pb_start()

    print("Pulse program started successfully")
    print("Press Ctrl+C to stop the program...")

    # Wait for user interrupt or run for specific time
    try:
        while True:
            time.sleep(1)
            status = pb.pb_read_status()
            print(status)
    except KeyboardInterrupt:
        print("\\nStopping pulse program...")
        pb.pb_stop()

except Exception as e:
    print(f"Error: {e}")

finally:
    # Clean up
    pb.pb_close()
    print("PulseBlaster closed")
"""


def opcode_symbol(opcode: OpCode) -> str:
    return OPCODE_SYMBOLS.get(opcode, DEFAULT_SYMBOL)


def instruction_line(inst: Instruction) -> str:
    return (
        f"    pb.pb_inst_pbonly({format_hex(inst.bitmask)}, {opcode_symbol(inst.opcode)}, "
        f"{inst.data}, {format_number(inst.duration_ns)} * pb.ns)"
    )


def program_to_spinapi(program: Program, generated_at: Optional[datetime] = None,
                       clock_mhz: float = DEFAULT_CLOCK_MHZ) -> str:
    header = program_header(program, "Generated SpinAPI Python program", "#", generated_at)
    body = "\n".join(instruction_line(inst) for inst in program.instructions)
    return "\n".join(header) + "\n" + _PREAMBLE.format(clock=clock_mhz) + body + _POSTAMBLE
