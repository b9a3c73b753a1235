"""
JSON exchange format.

The only lossless export: ``program_from_json(program_to_json(p)) == p``.
"""
import json

from ..types import Program, PulseProgramError


def program_to_json(program: Program, indent: int = 2) -> str:
    return json.dumps(program.to_dict(), indent=indent, ensure_ascii=False)


def program_from_json(text: str) -> Program:
    """
    Parse a program in the exchange format.

    Raises:
        PulseProgramError: for malformed JSON or a malformed program; an
            unknown unit or opcode raises the matching subclass.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PulseProgramError(f"Invalid program JSON: {e}") from e
    return Program.from_dict(data)
