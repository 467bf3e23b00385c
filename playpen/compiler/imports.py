"""Import canonicalization: anchor relative imports at the virtual root.

Compiled modules are loaded from a flat namespace, so `./button.vue` inside
`components/forms/input.vue` would otherwise resolve against the root. This
pass rewrites every relative specifier into a root-anchored one:

    components/forms/input.vue   './button.vue'  -> './components/forms/button.vue'
    components/forms/input.vue   '../icon.vue'   -> './components/icon.vue'
    components/forms/input.vue   '../../app.vue' -> './app.vue'

Only the specifier span of each matched import is replaced, so an unrelated
occurrence of the same text elsewhere in the module is left alone.

Every `./` specifier is read relative to the importing file, so rewriting
already-rewritten output of a nested file nests it again.
"""
from __future__ import annotations

import re

# Single-line `import ... from '<specifier>'` statements.
IMPORT_PATTERN = re.compile(r"""import\s+.*?\s+from\s+['"](.*?)['"]""")


def find_relative_imports(code: str) -> list[tuple[int, int, str]]:
    """Locate relative import specifiers as (start, end, specifier) spans."""
    spans: list[tuple[int, int, str]] = []
    for match in IMPORT_PATTERN.finditer(code):
        specifier = match.group(1)
        if specifier.startswith("."):
            spans.append((match.start(1), match.end(1), specifier))
    return spans


def parent_dir(path: str) -> str:
    """Drop the last path segment; files at the root have no parent."""
    index = path.rfind("/")
    if index == -1:
        return ""
    return path[:index]


def to_full_path(filename: str, specifier: str) -> str:
    """Resolve one relative specifier against the importing file's directory."""
    current_dir = parent_dir(filename)

    if specifier.startswith(".."):
        rest = specifier
        while rest.startswith(".."):
            rest = rest[3:]
            current_dir = parent_dir(current_dir)
        prefix = current_dir + "/" if current_dir else ""
        return "./" + prefix + rest

    if specifier.startswith("."):
        prefix = current_dir + "/" if current_dir else ""
        return "./" + prefix + specifier[2:]

    return specifier


def canonicalize(filename: str, code: str) -> str:
    """Rewrite all relative import specifiers in `code` to root-anchored paths.

    Files at the virtual root (no `/` in the filename) are returned unchanged:
    a relative import there already resolves against the root.
    """
    if "/" not in filename:
        return code

    spans = find_relative_imports(code)
    if not spans:
        return code

    parts: list[str] = []
    cursor = 0
    for start, end, specifier in spans:
        parts.append(code[cursor:start])
        parts.append(to_full_path(filename, specifier))
        cursor = end
    parts.append(code[cursor:])
    return "".join(parts)
