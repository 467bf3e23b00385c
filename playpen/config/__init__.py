"""Configuration: project manifests and compile options as Pydantic models.

A playground project (its files, the compiler services to use, and the
options for each compile stage) can be described in a JSON or YAML manifest.
Loading it through Pydantic gives clear error messages when something is off.
"""
from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator

SUPPORTED_SUFFIXES = (".vue", ".js", ".ts", ".css")


def check_positive(value: int) -> int:
    """Validate an integer is > 0."""
    if value <= 0:
        raise ValueError(f"Validation failed: SHOULD_BE_POSITIVE: {value!r} <= 0")
    return value


def check_virtual_path(value: str) -> str:
    """Validate a slash-separated virtual path relative to the virtual root."""
    if not value:
        raise ValueError("Validation failed: virtual path is empty")
    if value.startswith("/") or "\\" in value:
        raise ValueError(
            f"Validation failed: {value!r} is not a relative virtual path. "
            "Fix: use forward slashes and no leading '/'."
        )
    if any(segment in ("", ".", "..") for segment in value.split("/")):
        raise ValueError(
            f"Validation failed: {value!r} has an empty or relative segment. "
            "Fix: spell the path out from the virtual root."
        )
    return value


# Type aliases for validated primitives, used in config models
PositiveInt = Annotated[int, AfterValidator(check_positive)]
VirtualPath = Annotated[str, AfterValidator(check_virtual_path)]
