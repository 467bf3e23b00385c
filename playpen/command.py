"""Typed CLI command payloads.

Each command type represents a distinct user intent. The CLI parses arguments
into these typed objects, which are then dispatched to the appropriate handler.
"""
from __future__ import annotations

from dataclasses import dataclass

from playpen.config.project import Project


@dataclass(frozen=True, slots=True)
class CompileCommand:
    """Request to compile a project's files and report the results.

    `file` limits the printed artifacts to one file; every file is still
    compiled so the report is complete.
    """

    project: Project
    file: str | None
    print_code: bool


@dataclass(frozen=True, slots=True)
class ImportsCommand:
    """Request to canonicalize the imports of one source as if it lived at `filename`."""

    filename: str
    source: str


Command = CompileCommand | ImportsCommand
