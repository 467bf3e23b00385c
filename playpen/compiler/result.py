"""Result types for a compile call and its stages.

Every compile returns its own `CompileResult` instead of writing into a shared
error slot, so callers can keep errors per file and two compiles never clobber
each other's state. Stage outcomes make the abort-vs-degrade decision an
explicit branch in the Compiler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field

from playpen.compiler.descriptor import BindingMetadata


class CompileOutcome(enum.Enum):
    """What a compile call did to the file's artifact.

    SKIPPED: nothing to do (blank source or an inert suffix)
    COMPILED: the artifact was updated
    ABORTED: the artifact was left as it was; errors explain why
    """

    SKIPPED = "skipped"
    COMPILED = "compiled"
    ABORTED = "aborted"


@dataclass(slots=True)
class CompileResult:
    """The outcome of compiling one virtual file.

    `errors` is empty on a clean compile. A COMPILED result may still carry
    errors from style blocks that failed without stopping the compile.
    `warnings` lists SSR degradations, which never affect client output.
    """

    filename: str
    outcome: CompileOutcome
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome is not CompileOutcome.ABORTED and not self.errors

    @classmethod
    def skipped(cls, filename: str) -> "CompileResult":
        return cls(filename=filename, outcome=CompileOutcome.SKIPPED)

    @classmethod
    def aborted(cls, filename: str, errors: list[str]) -> "CompileResult":
        return cls(filename=filename, outcome=CompileOutcome.ABORTED, errors=errors)


@dataclass(frozen=True, slots=True)
class ScriptOutcome:
    """Compiled script code plus bindings, or the errors that stopped it."""

    code: str = ""
    bindings: BindingMetadata | None = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def failed(cls, *errors: str) -> "ScriptOutcome":
        return cls(errors=errors)


@dataclass(frozen=True, slots=True)
class TemplateOutcome:
    """Compiled render code, or the template errors."""

    code: str = ""
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def failed(cls, *errors: str) -> "TemplateOutcome":
        return cls(errors=errors)


class CodeAccumulator:
    """Collects the code fragments of one output variant (client or SSR)."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def append(self, code: str) -> None:
        self.parts.append(code)

    def degrade(self, error: str) -> None:
        """Replace everything collected so far with an inline error comment.

        Only the first line of the error is kept so the comment stays on one
        line. Later fragments still append after the comment.
        """
        first_line = error.splitlines()[0] if error else ""
        self.parts = [f"/* SSR compile error: {first_line} */"]

    @property
    def code(self) -> str:
        return "".join(self.parts)

    def __bool__(self) -> bool:
        return bool(self.code)


def append_shared(code: str, *targets: CodeAccumulator) -> None:
    """Append the same fragment to several variants."""
    for target in targets:
        target.append(code)
