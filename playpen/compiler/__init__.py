"""Compiler: turn one virtual file into client, SSR and CSS output.

Plain files are handled directly (stylesheets verbatim, scripts optionally
type-stripped). Component files go through the full pipeline:

1. Parse: split the file into template, script and style sections
2. Check: reject pre-processor languages the playground cannot run
3. Script: compile for the client, and again for SSR under `<script setup>`
4. Template: compile the render function (client and SSR) when not inlined
5. Assemble: attach scope id and filename, export the component object
6. Styles: compile each block, tolerating per-block failures

Client and SSR code are collected side by side. An SSR failure only degrades
the SSR variant; an abort leaves the file's previous artifact untouched.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from playpen.compiler.descriptor import SFCDescriptor
from playpen.compiler.hashing import scope_attribute
from playpen.compiler.imports import canonicalize
from playpen.compiler.result import (
    CodeAccumulator,
    CompileOutcome,
    CompileResult,
    append_shared,
)
from playpen.compiler.script import COMP_IDENTIFIER, ScriptCompiler, format_trace
from playpen.compiler.services import CompilerServices, format_error
from playpen.compiler.style import StyleCompiler, StyleModuleError
from playpen.compiler.template import TemplateCompiler
from playpen.config.options import CompileOptions
from playpen.files import CompiledArtifact, VirtualFile

__all__ = [
    "Compiler",
    "ScriptCompiler",
    "TemplateCompiler",
    "StyleCompiler",
    "canonicalize",
    "COMP_IDENTIFIER",
]

logger = logging.getLogger(__name__)

PREPROCESSOR_ERROR = (
    'lang="x" pre-processors for <template> or <style> are currently not supported.'
)
SCRIPT_LANG_ERROR = 'Only lang="ts" is supported for <script> blocks.'


class Compiler:
    """Compiles virtual files through the external compiler services.

    Compiles are meant to run one at a time; each call returns its own
    `CompileResult` and writes only to the file it was given.
    """

    services: CompilerServices
    options: CompileOptions
    script: ScriptCompiler
    template: TemplateCompiler
    style: StyleCompiler

    def __init__(
        self,
        services: CompilerServices,
        options: CompileOptions | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize the stage compilers with caller overrides merged in."""
        self.services = services
        self.options = (options or CompileOptions()).merged(overrides)
        self.script = ScriptCompiler(services, self.options)
        self.template = TemplateCompiler(services, self.options)
        self.style = StyleCompiler(services, self.options)

    async def compile_file(self, file: VirtualFile) -> CompileResult:
        """Compile `file` in place and report what happened.

        Never raises for compile failures; they are returned as errors.
        """
        filename, code = file.filename, file.code

        if not code.strip():
            return CompileResult.skipped(filename)

        match file.suffix:
            case ".css":
                file.compiled.css = code
                return CompileResult(filename=filename, outcome=CompileOutcome.COMPILED)
            case ".js" | ".ts":
                try:
                    compiled = await self.compile_script_file(filename, code)
                except Exception as e:
                    logger.debug("script file compile failed for %s", filename)
                    return CompileResult.aborted(filename, [format_trace(e)])
                file.compiled.js = file.compiled.ssr = compiled
                return CompileResult(filename=filename, outcome=CompileOutcome.COMPILED)
            case ".vue":
                return await self.compile_component(file)
            case _:
                return CompileResult.skipped(filename)

    async def compile_script_file(self, filename: str, code: str) -> str:
        """Compile a plain `.js` / `.ts` module."""
        refs = self.services.refs
        if refs is not None and refs.should_transform(code):
            code = refs.transform(code, filename=filename)
        if filename.endswith(".ts"):
            code = await self.services.strip_types(code)
        return canonicalize(filename, code)

    def check_languages(self, descriptor: SFCDescriptor) -> str | None:
        """Return the abort message for unsupported languages, if any."""
        template_lang = descriptor.template.lang if descriptor.template else None
        if template_lang or any(style.lang for style in descriptor.styles):
            return PREPROCESSOR_ERROR
        script_lang = descriptor.script_lang
        if script_lang and script_lang != "ts":
            return SCRIPT_LANG_ERROR
        return None

    def needs_template_compile(self, descriptor: SFCDescriptor) -> bool:
        """A separate render compile is needed unless `<script setup>` inlines it."""
        if descriptor.template is None:
            return False
        return (
            descriptor.script_setup is None
            or self.options.script.inline_template is False
        )

    async def compile_component(self, file: VirtualFile) -> CompileResult:
        """Run the component pipeline; commit the artifact only if nothing aborts."""
        filename = file.filename
        scope_id = self.services.hash_fn(filename)

        try:
            parsed = self.services.sfc.parse(file.code, filename=filename, source_map=True)
        except Exception as e:
            return CompileResult.aborted(filename, [format_trace(e)])
        if parsed.errors:
            return CompileResult.aborted(
                filename, [format_error(e) for e in parsed.errors]
            )
        descriptor = parsed.descriptor

        if (message := self.check_languages(descriptor)) is not None:
            return CompileResult.aborted(filename, [message])
        is_ts = descriptor.script_lang == "ts"

        client = CodeAccumulator()
        ssr = CodeAccumulator()
        warnings: list[str] = []

        client_script = await self.script.compile(
            descriptor, scope_id, ssr=False, is_ts=is_ts
        )
        if not client_script.ok:
            return CompileResult.aborted(filename, list(client_script.errors))
        client.append(client_script.code)

        if descriptor.script_setup is not None:
            # The render function is inlined into <script setup>, so SSR needs
            # its own script compile.
            ssr_script = await self.script.compile(
                descriptor, scope_id, ssr=True, is_ts=is_ts
            )
            if ssr_script.ok:
                ssr.append(ssr_script.code)
            else:
                ssr.degrade(ssr_script.errors[0])
                warnings.append(ssr_script.errors[0])
        else:
            ssr.append(client_script.code)

        if self.needs_template_compile(descriptor):
            client_template = await self.template.compile(
                descriptor, scope_id, client_script.bindings, ssr=False, is_ts=is_ts
            )
            if not client_template.ok:
                return CompileResult.aborted(filename, list(client_template.errors))
            client.append(client_template.code)

            ssr_template = await self.template.compile(
                descriptor, scope_id, client_script.bindings, ssr=True, is_ts=is_ts
            )
            if ssr_template.ok:
                ssr.append(ssr_template.code)
            else:
                ssr.degrade(ssr_template.errors[0])
                warnings.append(ssr_template.errors[0])

        if descriptor.has_scoped_style:
            append_shared(
                f"\n{COMP_IDENTIFIER}.__scopeId = {json.dumps(scope_attribute(scope_id))}",
                client,
                ssr,
            )

        staged = CompiledArtifact(
            js=file.compiled.js, ssr=file.compiled.ssr, css=file.compiled.css
        )
        if client or ssr:
            append_shared(
                f"\n{COMP_IDENTIFIER}.__file = {json.dumps(filename)}"
                f"\nexport default {COMP_IDENTIFIER}",
                client,
                ssr,
            )
            staged.js = canonicalize(filename, client.code.lstrip())
            staged.ssr = ssr.code.lstrip()

        try:
            styles = await self.style.compile(descriptor, scope_id)
        except StyleModuleError as e:
            return CompileResult.aborted(filename, [str(e)])
        staged.css = styles.css

        file.compiled.js = staged.js
        file.compiled.ssr = staged.ssr
        file.compiled.css = staged.css
        logger.debug(
            "compiled %s (style errors=%d, ssr warnings=%d)",
            filename,
            len(styles.errors),
            len(warnings),
        )
        return CompileResult(
            filename=filename,
            outcome=CompileOutcome.COMPILED,
            errors=styles.errors,
            warnings=warnings,
        )
