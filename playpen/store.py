"""Store: the playground's virtual files and their latest compile errors.

Errors are kept per filename, so the result of compiling one file never
overwrites what is known about another. Compiles run one at a time.
"""
from __future__ import annotations

import logging

from playpen.compiler import Compiler
from playpen.compiler.result import CompileResult
from playpen.files import VirtualFile

logger = logging.getLogger(__name__)

DEFAULT_MAIN_FILE = "App.vue"


class Store:
    """Holds the virtual files of a playground session.

    Files keep insertion order; `compile_all` follows it.
    """

    def __init__(self, compiler: Compiler, main_file: str = DEFAULT_MAIN_FILE) -> None:
        self.compiler = compiler
        self.main_file = main_file
        self.active_filename = main_file
        self.files: dict[str, VirtualFile] = {}
        self.errors: dict[str, list[str]] = {}

    # ─────────────────────────────────────────────────────────────────────
    # Files
    # ─────────────────────────────────────────────────────────────────────

    def add_file(self, filename: str, code: str = "") -> VirtualFile:
        """Add a file (or replace its source) and make it the active file."""
        if filename in self.files:
            file = self.files[filename]
            file.code = code
        else:
            file = VirtualFile(filename=filename, code=code)
            self.files[filename] = file
        self.active_filename = filename
        return file

    def get(self, filename: str) -> VirtualFile:
        try:
            return self.files[filename]
        except KeyError:
            raise ValueError(f"No such file: {filename!r}") from None

    @property
    def active_file(self) -> VirtualFile | None:
        return self.files.get(self.active_filename)

    def set_active(self, filename: str) -> None:
        self.active_filename = self.get(filename).filename

    def delete_file(self, filename: str) -> None:
        """Remove a file and forget its errors. The main file cannot be removed."""
        if filename == self.main_file:
            raise ValueError(
                f"Cannot delete {filename!r}: it is the main file. "
                "Fix: choose another main file first."
            )
        self.get(filename)
        del self.files[filename]
        self.errors.pop(filename, None)
        if self.active_filename == filename:
            self.active_filename = self.main_file

    async def rename_file(self, old: str, new: str) -> CompileResult:
        """Rename a file and recompile it; its scope id follows the new name."""
        if new in self.files:
            raise ValueError(f"Cannot rename {old!r}: {new!r} already exists.")
        file = self.get(old)

        # Rebuild the mapping to keep the file's position.
        self.files = {
            (new if name == old else name): f for name, f in self.files.items()
        }
        file.filename = new
        self.errors.pop(old, None)
        if self.main_file == old:
            self.main_file = new
        if self.active_filename == old:
            self.active_filename = new
        return await self.compile(new)

    # ─────────────────────────────────────────────────────────────────────
    # Compilation
    # ─────────────────────────────────────────────────────────────────────

    async def compile(self, filename: str) -> CompileResult:
        """Compile one file and record its errors (cleared on a clean compile)."""
        result = await self.compiler.compile_file(self.get(filename))
        self.errors[filename] = list(result.errors)
        logger.debug("%s: %s", filename, result.outcome.value)
        return result

    async def compile_all(self) -> list[CompileResult]:
        """Compile every file in insertion order, one after another."""
        results: list[CompileResult] = []
        for filename in list(self.files):
            results.append(await self.compile(filename))
        return results

    def errors_for(self, filename: str) -> list[str]:
        return self.errors.get(filename, [])

    @property
    def active_errors(self) -> list[str]:
        return self.errors_for(self.active_filename)
