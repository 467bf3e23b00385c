"""Parsed structure of a single-file component.

The external parser produces one descriptor per compile. The compiler only
reads it: which sections exist, which language each declares, and which
style blocks are scoped or module-flagged.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Identifier -> binding kind (e.g. "setup-const", "props"), produced by script
# compilation and handed to the template compiler.
BindingMetadata = dict[str, str]


@dataclass(slots=True)
class SFCBlock:
    """One section of a component file (`<template>`, `<script>`, ...)."""

    content: str
    lang: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SFCScriptBlock(SFCBlock):
    """A `<script>` or `<script setup>` section."""

    setup: bool = False


@dataclass(slots=True)
class SFCStyleBlock(SFCBlock):
    """A `<style>` section.

    `module` is either a flag or the name given to `<style module="name">`.
    """

    scoped: bool = False
    module: bool | str = False


@dataclass(slots=True)
class SFCDescriptor:
    """The sections of one component file, in source order for styles."""

    filename: str
    source: str = ""
    template: SFCBlock | None = None
    script: SFCScriptBlock | None = None
    script_setup: SFCScriptBlock | None = None
    styles: list[SFCStyleBlock] = field(default_factory=list)
    css_vars: list[str] = field(default_factory=list)
    slotted: bool = False

    @property
    def has_scoped_style(self) -> bool:
        return any(style.scoped for style in self.styles)

    @property
    def script_lang(self) -> str | None:
        """Language declared by `<script>`, falling back to `<script setup>`."""
        return (self.script and self.script.lang) or (
            self.script_setup and self.script_setup.lang
        ) or None

    @property
    def primary_script(self) -> SFCScriptBlock | None:
        return self.script or self.script_setup
