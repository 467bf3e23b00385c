"""Project: a playground session described in a manifest file.

A project names its files (inline, or read from a directory next to the
manifest), the factory that provides the external compiler services, and
the compile options for each stage.
"""
from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import BaseModel, Field

from playpen.config import SUPPORTED_SUFFIXES, PositiveInt, VirtualPath
from playpen.config.options import CompileOptions
from playpen.compiler.services import CompilerServices


class Project(BaseModel):
    """A set of virtual files plus how to compile them."""

    version: PositiveInt = 1
    name: str | None = None
    services: str | None = None
    main: VirtualPath = "App.vue"
    files: dict[VirtualPath, str] = Field(default_factory=dict)
    root: Path | None = None
    options: CompileOptions = Field(default_factory=CompileOptions)

    @classmethod
    def from_path(cls, path: Path) -> "Project":
        """Load and validate a project from a JSON or YAML manifest.

        A relative `root` is resolved against the manifest's directory and
        every supported file below it is added to `files` (inline entries
        win on conflict).
        """
        text = path.read_text(encoding="utf-8")
        match path.suffix.lower():
            case ".json":
                payload = json.loads(text)
            case ".yml" | ".yaml":
                payload = yaml.safe_load(text)
            case s:
                raise ValueError(f"Unsupported format '{s}'")

        if payload is None:
            raise ValueError("Project payload is empty.")
        if not isinstance(payload, dict):
            raise ValueError(f"Project payload must be a dict, got {type(payload)!r}")

        project = cls.model_validate(payload)
        if project.root is not None:
            root = project.root if project.root.is_absolute() else path.parent / project.root
            project = project.model_copy(
                update={"root": root, "files": {**read_tree(root), **project.files}}
            )
        return project

    def load_services(self) -> CompilerServices:
        """Import the services factory named by `services` and call it.

        The reference has the form `package.module:attribute`; the attribute
        is either a `CompilerServices` instance or a callable returning one.
        """
        if not self.services:
            raise ValueError(
                "Project does not name compiler services. "
                "Fix: set `services: package.module:factory` in the manifest."
            )
        module_name, _, attr = self.services.partition(":")
        if not module_name or not attr:
            raise ValueError(
                f"Invalid services reference {self.services!r}. "
                "Fix: use the form `package.module:factory`."
            )
        mod = importlib.import_module(module_name)
        target: CompilerServices | Callable[[], Any] = getattr(mod, attr)
        services = target if isinstance(target, CompilerServices) else target()
        if not isinstance(services, CompilerServices):
            raise ValueError(
                f"{self.services} produced {type(services)!r}, expected CompilerServices."
            )
        return services


def read_tree(root: Path) -> dict[str, str]:
    """Read every supported source file below `root`, keyed by virtual path."""
    if not root.is_dir():
        raise ValueError(f"Project root is not a directory: {root}")
    files: dict[str, str] = {}
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix in SUPPORTED_SUFFIXES:
            files[path.relative_to(root).as_posix()] = path.read_text(encoding="utf-8")
    return files
