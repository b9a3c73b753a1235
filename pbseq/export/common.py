"""
Helpers shared by the text exporters.
"""
from datetime import datetime
from typing import List, Optional

from ..types import Program

UNTITLED = "Untitled"


def program_header(program: Program, title: str, comment: str = "#",
                   generated_at: Optional[datetime] = None) -> List[str]:
    """Comment lines naming the program.

    The timestamp line only appears when ``generated_at`` is given, so the
    same program always exports to the same text by default.
    """
    lines = [
        f"{comment} {title}",
        f"{comment} Program: {program.name or UNTITLED}",
    ]
    if generated_at is not None:
        lines.append(f"{comment} Generated on: {generated_at.isoformat()}")
    lines.append(f"{comment} Total Instructions: {len(program.instructions)}")
    return lines
