"""Style stage: compile each `<style>` block and aggregate the CSS.

Style compilation is tolerant: a block that fails is reported and skipped,
the remaining blocks still compile. `<style module>` is the one exception and
stops the whole component compile.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from playpen.compiler.descriptor import SFCDescriptor
from playpen.compiler.script import format_trace
from playpen.compiler.services import CompilerServices, format_error
from playpen.config.options import CompileOptions

logger = logging.getLogger(__name__)

NO_STYLES_CSS = "/* No <style> tags present */"
STYLE_MODULE_ERROR = "<style module> is not supported in the playground."

# The style toolchain calls `pathToFileURL`, which the browser sandbox lacks;
# failures mentioning it are an environment limitation, not a user error.
IGNORED_ERROR_MARKER = "pathToFileURL"


class StyleModuleError(Exception):
    """A component declared `<style module>`."""

    def __init__(self) -> None:
        super().__init__(STYLE_MODULE_ERROR)


@dataclass(slots=True)
class StyleOutput:
    """Aggregated CSS of a component plus the errors of blocks that failed."""

    css: str
    errors: list[str] = field(default_factory=list)


class StyleCompiler:
    """Compiles the style blocks of a component in declaration order."""

    def __init__(self, services: CompilerServices, options: CompileOptions) -> None:
        self.services = services
        self.options = options

    async def compile(self, descriptor: SFCDescriptor, scope_id: str) -> StyleOutput:
        """Compile every style block.

        Raises:
            StyleModuleError: If any block is module-flagged.
        """
        chunks: list[str] = []
        errors: list[str] = []
        for index, style in enumerate(descriptor.styles):
            if style.module:
                raise StyleModuleError()

            try:
                result = await self.services.sfc.compile_style_async(
                    {
                        **self.options.style.as_kwargs(),
                        "source": style.content,
                        "filename": descriptor.filename,
                        "id": scope_id,
                        "scoped": style.scoped,
                        "modules": bool(style.module),
                    }
                )
            except Exception as e:
                messages = [format_trace(e)]
            else:
                messages = [format_error(e) for e in result.errors]
            if messages:
                if IGNORED_ERROR_MARKER in messages[0]:
                    logger.debug(
                        "ignoring style error in %s block %d: %s",
                        descriptor.filename,
                        index,
                        messages[0],
                    )
                    continue
                errors.extend(messages)
                continue
            chunks.append(result.code + "\n")

        css = "".join(chunks).strip()
        return StyleOutput(css=css or NO_STYLES_CSS, errors=errors)
