"""Command-line interface for playpen.

Commands:
- compile: load a project manifest, compile every file, report the results
- imports: show how relative imports of a source are anchored at the virtual root
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from playpen.command import Command, CompileCommand, ImportsCommand
from playpen.compiler import Compiler
from playpen.compiler.imports import canonicalize
from playpen.compiler.result import CompileResult
from playpen.config.project import Project
from playpen.console import logger
from playpen.store import Store


class _Args(argparse.Namespace):
    """Typed namespace for CLI arguments."""

    command: str | None = None
    project_manifest: Path | None = None
    file: str | None = None
    print_code: bool = False

    filename: str | None = None
    source: Path | None = None


class CLI(argparse.ArgumentParser):
    """Command-line interface with one subcommand per intent."""

    def __init__(self) -> None:
        super().__init__(
            prog="playpen",
            description="Playpen - compile single-file components in a virtual namespace.",
        )

        _ = self.add_argument(
            "--version",
            action="version",
            version="%(prog)s 0.1.0",
            help="Show the version and exit.",
        )

        subparsers = self.add_subparsers(
            dest="command",
            parser_class=argparse.ArgumentParser,
        )

        compile_parser = subparsers.add_parser(
            "compile",
            help="Compile every file of a project manifest and report the results.",
        )
        _ = compile_parser.add_argument(
            "project_manifest",
            type=Path,
            metavar="manifest",
            help="Project manifest path (.json, .yml, or .yaml).",
        )
        _ = compile_parser.add_argument(
            "--file",
            type=str,
            default=None,
            help="Only print the artifacts of this virtual file.",
        )
        _ = compile_parser.add_argument(
            "--print-code",
            action="store_true",
            default=False,
            dest="print_code",
            help="Print the compiled client, SSR and CSS output.",
        )

        imports_parser = subparsers.add_parser(
            "imports",
            help="Rewrite relative imports of a source as if it lived at FILENAME.",
        )
        _ = imports_parser.add_argument(
            "filename",
            type=str,
            help="Virtual path of the file, e.g. components/Button.vue.",
        )
        _ = imports_parser.add_argument(
            "source",
            type=Path,
            nargs="?",
            default=None,
            help="Source file to read. Reads stdin when omitted.",
        )

    def parse_command(self, argv: list[str] | None = None) -> Command:
        """Parse CLI arguments into a typed command payload."""
        args = self.parse_args(argv, namespace=_Args())

        match args.command:
            case "compile":
                if args.project_manifest is None:
                    raise ValueError("compile requires a project manifest path.")
                project = Project.from_path(args.project_manifest)
                if args.file is not None and args.file not in project.files:
                    raise ValueError(
                        f"{args.file!r} is not a file of the project. "
                        f"Known files: {', '.join(project.files) or '(none)'}."
                    )
                return CompileCommand(
                    project=project,
                    file=args.file,
                    print_code=bool(args.print_code),
                )
            case "imports":
                if args.filename is None:
                    raise ValueError("imports requires a virtual filename.")
                if args.source is None:
                    source = sys.stdin.read()
                else:
                    source = args.source.read_text(encoding="utf-8")
                return ImportsCommand(filename=args.filename, source=source)
            case None:
                raise ValueError("No command given. Fix: run `playpen compile MANIFEST`.")
            case _:
                raise ValueError(f"Invalid command: {args.command}")


async def compile_project(project: Project) -> tuple[Store, list[CompileResult]]:
    """Load a project into a fresh store and compile every file in order."""
    compiler = Compiler(project.load_services(), project.options)
    store = Store(compiler, main_file=project.main)
    for filename, code in project.files.items():
        store.add_file(filename, code)
    results = await store.compile_all()
    return store, results


def print_artifacts(store: Store, only: str | None = None) -> None:
    """Print the compiled output slots of each (or one) file."""
    for filename, file in store.files.items():
        if only is not None and filename != only:
            continue
        logger.subheader(escape(filename))
        if file.compiled.js:
            logger.code(file.compiled.js, title="client")
        if file.compiled.ssr:
            logger.code(file.compiled.ssr, title="ssr")
        if file.compiled.css:
            logger.code(file.compiled.css, lexer="css", title="css")


def run_compile(command: CompileCommand) -> int:
    """Compile a project; non-zero exit if any file aborted or reported errors."""
    project = command.project
    logger.header("Compile", project.name or project.main)
    logger.key_value(
        {
            "main": project.main,
            "files": len(project.files),
            "services": project.services,
        }
    )
    store, results = asyncio.run(compile_project(project))
    logger.compile_results(results)

    if command.print_code or command.file is not None:
        print_artifacts(store, only=command.file)

    failed = [r for r in results if not r.ok]
    if failed:
        logger.error(f"{len(failed)} of {len(results)} files have errors")
        return 1
    logger.success(f"Compiled {len(results)} files")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns exit code (0 for success, non-zero for failure).
    """
    cli = CLI()

    try:
        command = cli.parse_command(argv)

        match command:
            case CompileCommand() as cmd:
                return run_compile(cmd)
            case ImportsCommand() as cmd:
                sys.stdout.write(canonicalize(cmd.filename, cmd.source))
                return 0
            case _:
                raise ValueError(f"Invalid command payload: {type(command)!r}")

    except Exception as e:
        logger.error(f"Error: {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
