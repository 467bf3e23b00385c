"""Script stage: compile `<script>` / `<script setup>` into module code."""
from __future__ import annotations

import json
import logging
import traceback

from playpen.compiler.descriptor import SFCDescriptor
from playpen.compiler.result import ScriptOutcome
from playpen.compiler.services import CompilerServices
from playpen.config.options import CompileOptions

logger = logging.getLogger(__name__)

# Name the compiled component object is bound to in every generated module.
COMP_IDENTIFIER = "__sfc__"

# Diagnostic traces are cut to this many lines before they are reported.
MAX_TRACE_LINES = 12


def expression_plugins(is_ts: bool) -> list[str] | None:
    return ["typescript"] if is_ts else None


def format_trace(exc: BaseException, limit: int = MAX_TRACE_LINES) -> str:
    """Render an exception as `Type: message` followed by its stack, truncated."""
    head = traceback.format_exception_only(type(exc), exc)
    frames = traceback.format_tb(exc.__traceback__)
    lines = "".join(head + frames).splitlines()
    return "\n".join(lines[:limit])


class ScriptCompiler:
    """Compiles the script sections of a component.

    Produces the component object declaration (bound to `__sfc__`) and the
    binding metadata the template stage needs.
    """

    def __init__(self, services: CompilerServices, options: CompileOptions) -> None:
        self.services = services
        self.options = options

    def build_options(
        self, descriptor: SFCDescriptor, scope_id: str, *, ssr: bool, is_ts: bool
    ) -> dict[str, object]:
        """Options for the external script compiler, caller options merged in."""
        template = self.options.template.as_kwargs()
        compiler_options = dict(template.pop("compiler_options", {}))
        compiler_options["expression_plugins"] = expression_plugins(is_ts)
        return {
            "inline_template": True,
            **self.options.script.as_kwargs(),
            "id": scope_id,
            "template_options": {
                **template,
                "ssr": ssr,
                "ssr_css_vars": descriptor.css_vars,
                "compiler_options": compiler_options,
            },
        }

    async def compile(
        self, descriptor: SFCDescriptor, scope_id: str, *, ssr: bool, is_ts: bool
    ) -> ScriptOutcome:
        """Compile the script sections for the client (`ssr=False`) or SSR build.

        A component without any script compiles to an empty component object.
        A compiler exception becomes a failed outcome carrying its truncated
        trace.
        """
        script = descriptor.primary_script
        if script is None:
            return ScriptOutcome(code=f"\nconst {COMP_IDENTIFIER} = {{}}")

        options = self.build_options(descriptor, scope_id, ssr=ssr, is_ts=is_ts)
        try:
            compiled = self.services.sfc.compile_script(descriptor, options)

            code = ""
            if compiled.bindings:
                code += (
                    f"\n/* Analyzed bindings: {json.dumps(compiled.bindings, indent=2)} */"
                )
            code += "\n" + self.services.sfc.rewrite_default(
                compiled.content, COMP_IDENTIFIER, expression_plugins(is_ts)
            )

            if script.lang == "ts":
                code = await self.services.strip_types(code)
        except Exception as e:
            logger.debug("script compile failed for %s (ssr=%s)", descriptor.filename, ssr)
            return ScriptOutcome.failed(format_trace(e))

        return ScriptOutcome(code=code, bindings=compiled.bindings)
