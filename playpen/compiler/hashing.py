"""Scope ids: short, stable hashes of virtual filenames."""
from __future__ import annotations

import hashlib


def hash_id(filename: str) -> str:
    """Derive a scope id from a filename.

    Deterministic and stable for as long as the filename is unchanged. Short
    ids may collide across very large projects, which only affects styling.
    """
    h = hashlib.sha1(filename.encode("utf-8"))
    return h.hexdigest()[:8]


def scope_attribute(scope_id: str) -> str:
    """The attribute name scoped styles and elements are tagged with."""
    return f"data-v-{scope_id}"
