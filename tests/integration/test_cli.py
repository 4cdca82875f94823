"""
Test cases for the jsonmend command line interface.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from jsonmend.cli import build_parser, main


def run_cli(argv, stdin=""):
    """Run main() and return (exit code, stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    with mock.patch("sys.stdin", io.StringIO(stdin)):
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCliInput(unittest.TestCase):
    """Test reading from stdin and files."""

    def test_stdin(self):
        code, out, err = run_cli([], stdin="{a: 1,}")
        self.assertEqual(code, 0)
        self.assertEqual(out, '{\n  "a": 1\n}\n')
        self.assertEqual(err, "")

    def test_dash_means_stdin(self):
        code, out, _ = run_cli(["-"], stdin="[1,]")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), [1])

    def test_file(self):
        with tempfile.NamedTemporaryFile(
            "w", suffix=".json", delete=False, encoding="utf-8"
        ) as f:
            f.write("{'name': 'café'}")
            path = f.name
        try:
            code, out, _ = run_cli([path])
        finally:
            os.unlink(path)

        self.assertEqual(code, 0)
        self.assertIn("café", out)

    def test_missing_file(self):
        code, out, err = run_cli(["/nonexistent/input.json"])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("jsonmend: "))


class TestCliOutput(unittest.TestCase):
    """Test layout and diagnostics options."""

    def test_indent(self):
        _, out, _ = run_cli(["--indent", "4"], stdin="{a: 1}")
        self.assertEqual(out, '{\n    "a": 1\n}\n')

    def test_minify(self):
        _, out, _ = run_cli(["--minify"], stdin="{a: 1, b: [1, 2]}")
        self.assertEqual(out, '{"a":1,"b":[1,2]}\n')

    def test_indent_and_minify_exclusive(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args(["--indent", "2", "--minify"])

    def test_negative_indent(self):
        code, _, err = run_cli(["--indent", "-1"], stdin="{}")
        self.assertEqual(code, 2)
        self.assertIn("--indent", err)

    def test_fixes_listed(self):
        code, _, err = run_cli(["--fixes"], stdin="{'a': 1,}")
        self.assertEqual(code, 0)
        self.assertEqual(
            err.splitlines(),
            [
                "fixed: Converted single quotes to double quotes",
                "fixed: Removed trailing commas",
            ],
        )

    def test_failure(self):
        code, out, err = run_cli([], stdin="{not json at all")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("error: Expecting property name", err)


class TestCliConfig(unittest.TestCase):
    """Test configuration flags."""

    def test_conservative_skips_bare_values(self):
        code, _, _ = run_cli(["--conservative"], stdin="{a: b}")
        self.assertEqual(code, 1)

    def test_no_revive(self):
        _, out, _ = run_cli(["--no-revive"], stdin='{"a": "[1]"}')
        self.assertEqual(json.loads(out), {"a": "[1]"})

    def test_discard_prefix(self):
        _, out, _ = run_cli(["--discard-prefix"], stdin='{"a": "body: [1]"}')
        self.assertEqual(json.loads(out), {"a": [1]})

    def test_wrap_prefix_by_default(self):
        _, out, _ = run_cli([], stdin='{"a": "body: [1]"}')
        self.assertEqual(json.loads(out), {"a": {"_prefix": "body", "_data": [1]}})

    def test_version(self):
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                main(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("jsonmend", out.getvalue())


if __name__ == "__main__":
    unittest.main()
