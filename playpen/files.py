"""Virtual files and their compiled output."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class CompiledArtifact:
    """Compiled output slots of one file.

    The slots are independent: a compile stage that is skipped leaves its
    slot as it was.
    """

    js: str = ""
    ssr: str = ""
    css: str = ""


@dataclass(slots=True)
class VirtualFile:
    """An in-memory source file addressed by a slash-separated virtual path."""

    filename: str
    code: str = ""
    compiled: CompiledArtifact = field(default_factory=CompiledArtifact)

    @property
    def suffix(self) -> str:
        """Extension including the dot, or "" when the name has none."""
        name = self.filename.rsplit("/", 1)[-1]
        index = name.rfind(".")
        return name[index:] if index > 0 else ""
