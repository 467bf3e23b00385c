"""Compile options for the script, template and style stages.

Each stage takes a small set of known options plus whatever compiler-specific
sub-options the external service understands; unknown keys are kept and
passed through untouched. No option is required.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StageOptions(BaseModel):
    """Options for one stage; extra keys pass through to the service."""

    model_config = ConfigDict(extra="allow")

    def as_kwargs(self) -> dict[str, Any]:
        """Options as a plain dict, leaving out unset known fields."""
        return self.model_dump(exclude_none=True)


class ScriptOptions(StageOptions):
    """`<script>` compilation.

    inline_template: compile `<script setup>` with the render function
        inlined. `False` forces a separate template compile.
    """

    inline_template: bool | None = None


class TemplateOptions(StageOptions):
    """`<template>` compilation.

    compiler_options: forwarded to the template compiler; `binding_metadata`
        and `expression_plugins` are filled in per compile.
    """

    compiler_options: dict[str, Any] = Field(default_factory=dict)


class StyleOptions(StageOptions):
    """`<style>` compilation (e.g. postcss plugins for the style service)."""


class CompileOptions(BaseModel):
    """Options for all stages of a component compile."""

    script: ScriptOptions = Field(default_factory=ScriptOptions)
    template: TemplateOptions = Field(default_factory=TemplateOptions)
    style: StyleOptions = Field(default_factory=StyleOptions)

    def merged(self, overrides: Mapping[str, Any] | None) -> "CompileOptions":
        """Return a copy with caller overrides merged in, key by key."""
        if not overrides:
            return self
        payload = deep_merge(self.model_dump(exclude_none=True), overrides)
        return CompileOptions.model_validate(payload)


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge `overrides` into `base`; nested mappings merge, others replace."""
    result: dict[str, Any] = dict(base)
    for key, value in overrides.items():
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result
