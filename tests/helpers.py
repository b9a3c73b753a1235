from pbseq.types import Instruction, OpCode


def make_inst(flags=0, opcode=OpCode.CONTINUE, duration=1000, data=0, units="ns", **kwargs):
    """Instruction with editor-like defaults: all off, CONTINUE, 1 μs."""
    return Instruction(flags=flags, opcode=opcode, data=data, duration=duration, units=units, **kwargs)
