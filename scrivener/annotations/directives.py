"""
Write directives produced by generators.

A directive names a target file and carries the node that renders its
content. Writing files is left to the caller: it should skip targets
that already exist unless ``allow_overwrite`` is set, and may run a
source formatter when ``format_source`` is set.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..codegen.nodes import Declaration


@dataclass(frozen=True)
class WriteDirective:
    file_name: str
    writer: Declaration
    allow_overwrite: bool = False
    format_source: bool = False

    def render(self) -> bytes:
        """Render the file content."""
        return self.writer.render_bytes()
