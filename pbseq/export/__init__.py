"""
Program exporters.

Four independent, pure text codecs plus a format-keyed dispatcher.
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from ..types import Program
from .assembly import branch_targets, program_to_assembly
from .json_codec import program_from_json, program_to_json
from .scripting import program_to_python
from .spinapi import program_to_spinapi


class ExportFormat(Enum):
    """导出格式 (value 为文件扩展名)"""
    JSON = "json"
    PYTHON = "py"
    SPINAPI = "spinapi.py"
    ASSEMBLY = "pb"


def export_program(program: Program, fmt: ExportFormat,
                   generated_at: Optional[datetime] = None) -> str:
    """Render ``program`` in ``fmt``. Only SpinAPI and assembly carry a timestamp."""
    if fmt is ExportFormat.JSON:
        return program_to_json(program)
    if fmt is ExportFormat.PYTHON:
        return program_to_python(program)
    if fmt is ExportFormat.SPINAPI:
        return program_to_spinapi(program, generated_at=generated_at)
    if fmt is ExportFormat.ASSEMBLY:
        return program_to_assembly(program, generated_at=generated_at)
    raise ValueError(f"Unsupported export format: {fmt!r}")


def suggested_filename(program: Program, fmt: ExportFormat) -> str:
    return f"{program.name or 'pulse_program'}.{fmt.value}"


__all__ = [
    'ExportFormat',
    'export_program',
    'suggested_filename',
    'program_to_json',
    'program_from_json',
    'program_to_python',
    'program_to_spinapi',
    'program_to_assembly',
    'branch_targets',
]
