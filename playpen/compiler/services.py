"""Contracts for the external compiler services.

Playpen does not parse components, generate render code, transform styles or
strip types itself. Those jobs belong to external services that are handed to
the Compiler as a `CompilerServices` bundle. This module pins down what the
Compiler expects from each of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol

from playpen.compiler.descriptor import BindingMetadata, SFCDescriptor
from playpen.compiler.hashing import hash_id


@dataclass(slots=True)
class ParseResult:
    """Output of `SFCCompiler.parse`."""

    descriptor: SFCDescriptor
    errors: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class ScriptCompileResult:
    """Output of `SFCCompiler.compile_script`."""

    content: str
    bindings: BindingMetadata | None = None


@dataclass(slots=True)
class TemplateCompileResult:
    """Output of `SFCCompiler.compile_template`."""

    code: str
    errors: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class StyleCompileResult:
    """Output of `SFCCompiler.compile_style_async`."""

    code: str
    errors: list[Any] = field(default_factory=list)


class SFCCompiler(Protocol):
    """The single-file component toolchain."""

    def parse(
        self, source: str, *, filename: str, source_map: bool
    ) -> ParseResult:
        ...

    def compile_script(
        self, descriptor: SFCDescriptor, options: dict[str, Any]
    ) -> ScriptCompileResult:
        """May raise on invalid script content."""
        ...

    def compile_template(self, options: dict[str, Any]) -> TemplateCompileResult:
        ...

    async def compile_style_async(
        self, options: dict[str, Any]
    ) -> StyleCompileResult:
        ...

    def rewrite_default(
        self, code: str, identifier: str, expression_plugins: list[str] | None
    ) -> str:
        """Replace `export default` with an assignment to `identifier`."""
        ...


class RefTransformer(Protocol):
    """Rewrites reactivity-ref sugar in plain scripts."""

    def should_transform(self, code: str) -> bool:
        ...

    def transform(self, code: str, *, filename: str) -> str:
        ...


TypeStripper = Callable[[str], Awaitable[str]]
HashFn = Callable[[str], str]


@dataclass(slots=True)
class CompilerServices:
    """Everything external the Compiler calls into."""

    sfc: SFCCompiler
    strip_types: TypeStripper
    refs: RefTransformer | None = None
    hash_fn: HashFn = hash_id


def format_error(error: object) -> str:
    """Render a collaborator error as a human-readable string.

    Services report errors either as plain strings or as objects carrying a
    `message` attribute (exceptions, compiler diagnostics).
    """
    if isinstance(error, str):
        return error
    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message
    return str(error)
