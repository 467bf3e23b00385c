"""
imports_test provides tests for import path canonicalization.
"""
from __future__ import annotations

import unittest

from playpen.compiler.imports import (
    canonicalize,
    find_relative_imports,
    parent_dir,
    to_full_path,
)


class ToFullPathTest(unittest.TestCase):
    """
    ToFullPathTest provides tests for resolving single specifiers.
    """

    def test_same_directory(self) -> None:
        self.assertEqual(to_full_path("a/b/c.vue", "./d"), "./a/b/d")

    def test_one_level_up(self) -> None:
        self.assertEqual(to_full_path("a/b/c.vue", "../d"), "./a/d")

    def test_two_levels_up(self) -> None:
        self.assertEqual(to_full_path("a/b/c.vue", "../../d"), "./d")

    def test_more_levels_than_directories(self) -> None:
        self.assertEqual(to_full_path("a/c.vue", "../../../d.js"), "./d.js")

    def test_bare_specifier_passes_through(self) -> None:
        self.assertEqual(to_full_path("a/b/c.vue", "vue"), "vue")

    def test_parent_dir(self) -> None:
        self.assertEqual(parent_dir("a/b/c.vue"), "a/b")
        self.assertEqual(parent_dir("c.vue"), "")


class CanonicalizeTest(unittest.TestCase):
    """
    CanonicalizeTest provides tests for rewriting whole modules.
    """

    def test_root_file_is_identity(self) -> None:
        code = "import A from './A.vue'\nimport B from '../B.vue'\n"
        self.assertEqual(canonicalize("App.vue", code), code)

    def test_rewrites_relative_imports_only(self) -> None:
        code = (
            "import { ref } from 'vue'\n"
            'import Button from "./Button.vue"\n'
            "import { icons } from '../icons.js'\n"
        )
        self.assertEqual(
            canonicalize("components/forms/Input.vue", code),
            "import { ref } from 'vue'\n"
            'import Button from "./components/forms/Button.vue"\n'
            "import { icons } from './components/icons.js'\n",
        )

    def test_only_the_specifier_span_is_replaced(self) -> None:
        code = "import d from './d'\nconst path = './d'\n"
        self.assertEqual(
            canonicalize("a/b/c.js", code),
            "import d from './a/b/d'\nconst path = './d'\n",
        )

    def test_repeated_specifier_rewritten_each_time(self) -> None:
        code = "import a from './x'\nimport { b } from './x'\n"
        self.assertEqual(
            canonicalize("lib/m.js", code),
            "import a from './lib/x'\nimport { b } from './lib/x'\n",
        )

    def test_idempotent_for_root_files(self) -> None:
        code = "import d from './d'\nimport e from '../e'\n"
        once = canonicalize("c.js", code)
        self.assertEqual(canonicalize("c.js", once), once)

    def test_idempotent_for_non_relative_specifiers(self) -> None:
        code = "import { h } from 'vue'\nimport x from '/abs/x.js'\n"
        once = canonicalize("a/b/c.js", code)
        self.assertEqual(once, code)
        self.assertEqual(canonicalize("a/b/c.js", once), once)

    def test_directory_named_like_top_level_is_still_relative(self) -> None:
        self.assertEqual(
            canonicalize("a/b/c.js", "import x from './a/x'"),
            "import x from './a/b/a/x'",
        )

    def test_finds_spans(self) -> None:
        code = "import x from './x'"
        start, end, specifier = find_relative_imports(code)[0]
        self.assertEqual(specifier, "./x")
        self.assertEqual(code[start:end], "./x")


if __name__ == "__main__":
    unittest.main()
