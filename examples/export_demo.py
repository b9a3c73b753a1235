#!/usr/bin/env python3
"""
Demo script: build a program, inspect its timeline and export it.
"""

from pbseq import (
    ExportFormat,
    Instruction,
    Program,
    analyze_timing,
    export_program,
    validate_program,
)
from pbseq.catalog import load_example
from pbseq.editing import append_instruction, update_instruction
from pbseq.time_utils import format_nanoseconds
from pbseq.visualization import plot_timeline, text_timeline


def demo_export():
    """Build a small program by editing, then show every export format"""

    print("=== pbseq Export Demo ===\n")

    # 1. Start from one laser pulse and append a STOP row
    instructions = (Instruction(flags=[0], opcode="CONTINUE", duration=2, units="ms"),)
    instructions = append_instruction(instructions)
    instructions = update_instruction(instructions, 1, opcode="STOP", duration=500_000)
    program = Program(name="Demo", instructions=instructions)

    print("1. Timeline:")
    print(text_timeline(program, channel_count=4))
    print()

    print("2. Validation:")
    print(validate_program(program) or "no warnings")
    print()

    print("3. Timing:")
    info = analyze_timing(program, channel_count=4)
    print(f"   total {format_nanoseconds(info['total_duration_ns'])}, "
          f"duty cycle {info['channel_duty_cycle']}")
    print()

    for fmt in ExportFormat:
        print(f"--- {fmt.name} ---")
        print(export_program(program, fmt))
        print()

    return program


def demo_plot():
    """Plot a built-in example"""
    fig, ax = plot_timeline(load_example("Rabi Oscillation"), filename="rabi_timeline.png")
    return fig, ax


if __name__ == "__main__":
    demo_export()
    demo_plot()
