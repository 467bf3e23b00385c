"""Template stage: compile `<template>` into a client or SSR render function."""
from __future__ import annotations

import logging
import re

from playpen.compiler.descriptor import BindingMetadata, SFCDescriptor
from playpen.compiler.result import TemplateOutcome
from playpen.compiler.script import COMP_IDENTIFIER, expression_plugins, format_trace
from playpen.compiler.services import CompilerServices, format_error
from playpen.config.options import CompileOptions

logger = logging.getLogger(__name__)

# The generated module exports its render entry point; we inline it instead.
RENDER_EXPORT = re.compile(r"\nexport (function|const) (render|ssrRender)")


class TemplateCompiler:
    """Compiles the template section and attaches the render function to `__sfc__`."""

    def __init__(self, services: CompilerServices, options: CompileOptions) -> None:
        self.services = services
        self.options = options

    def build_options(
        self,
        descriptor: SFCDescriptor,
        scope_id: str,
        bindings: BindingMetadata | None,
        *,
        ssr: bool,
        is_ts: bool,
    ) -> dict[str, object]:
        if descriptor.template is None:
            raise ValueError(f"{descriptor.filename}: component has no <template>.")
        template = self.options.template.as_kwargs()
        compiler_options = dict(template.pop("compiler_options", {}))
        compiler_options["binding_metadata"] = bindings
        compiler_options["expression_plugins"] = expression_plugins(is_ts)
        return {
            **template,
            "source": descriptor.template.content,
            "filename": descriptor.filename,
            "id": scope_id,
            "scoped": descriptor.has_scoped_style,
            "slotted": descriptor.slotted,
            "ssr": ssr,
            "ssr_css_vars": descriptor.css_vars,
            "is_prod": False,
            "compiler_options": compiler_options,
        }

    async def compile(
        self,
        descriptor: SFCDescriptor,
        scope_id: str,
        bindings: BindingMetadata | None,
        *,
        ssr: bool,
        is_ts: bool,
    ) -> TemplateOutcome:
        """Compile the template to `render` (client) or `ssrRender` (SSR)."""
        options = self.build_options(
            descriptor, scope_id, bindings, ssr=ssr, is_ts=is_ts
        )
        try:
            result = self.services.sfc.compile_template(options)
        except Exception as e:
            logger.debug("template compiler raised for %s (ssr=%s)", descriptor.filename, ssr)
            return TemplateOutcome.failed(format_trace(e))
        if result.errors:
            logger.debug("template compile failed for %s (ssr=%s)", descriptor.filename, ssr)
            return TemplateOutcome.failed(*(format_error(e) for e in result.errors))

        fn_name = "ssrRender" if ssr else "render"
        body = RENDER_EXPORT.sub(rf"\n\1 {fn_name}", result.code, count=1)
        code = f"\n{body}\n{COMP_IDENTIFIER}.{fn_name} = {fn_name}"

        script = descriptor.primary_script
        if script is not None and script.lang == "ts":
            try:
                code = await self.services.strip_types(code)
            except Exception as e:
                logger.debug("render type strip failed for %s (ssr=%s)", descriptor.filename, ssr)
                return TemplateOutcome.failed(format_trace(e))

        return TemplateOutcome(code=code)
