"""
Test cases for the jsonmend repair engine.

Tests focus on the RepairResult contract: success/failure, the data and its
formatting, and the ordered fixes/errors lists.
"""

import json
import unittest

import jsonmend
from jsonmend.core.constants import (
    FIX_EMBEDDED_STRINGS,
    FIX_PYTHON_LITERALS,
    FIX_SINGLE_QUOTES,
    FIX_STRIP_COMMENTS,
    FIX_TRAILING_COMMAS,
    FIX_UNQUOTED_KEYS,
    FIX_UNQUOTED_VALUES,
)
from jsonmend.core.engine import RepairEngine, RepairResult, loads_strict
from jsonmend.utils.config import RepairConfig, RepairLimits


class TestRepairSuccess(unittest.TestCase):
    """Test inputs that can be repaired."""

    def test_valid_json_untouched(self):
        result = jsonmend.repair('{"a": 1}')
        self.assertTrue(result.success)
        self.assertEqual(result.data, {"a": 1})
        self.assertEqual(result.formatted, '{\n  "a": 1\n}')
        self.assertEqual(result.errors, ())
        self.assertEqual(result.fixes, ())

    def test_surrounding_whitespace_ignored(self):
        result = jsonmend.repair('  {"a": 1}  \n')
        self.assertTrue(result.success)
        self.assertEqual(result.fixes, ())

    def test_trailing_comma(self):
        result = jsonmend.repair('{"a":1,}')
        self.assertEqual(result.data, {"a": 1})
        self.assertEqual(result.fixes, (FIX_TRAILING_COMMAS,))

    def test_unquoted_key_and_value(self):
        result = jsonmend.repair("{a: b}")
        self.assertEqual(result.data, {"a": "b"})
        self.assertEqual(result.fixes, (FIX_UNQUOTED_KEYS, FIX_UNQUOTED_VALUES))

    def test_python_literals(self):
        result = jsonmend.repair("{'ok': True, 'val': None}")
        self.assertEqual(result.data, {"ok": True, "val": None})
        self.assertEqual(result.fixes, (FIX_PYTHON_LITERALS, FIX_SINGLE_QUOTES))

    def test_apostrophe_before_closing_brace(self):
        result = jsonmend.repair("{'name': 'O'Brien'}")
        self.assertEqual(result.data, {"name": "O'Brien"})

    def test_fixes_follow_pipeline_order(self):
        result = jsonmend.repair("// config\n{mode: fast, 'retries': 3,}")
        self.assertEqual(result.data, {"mode": "fast", "retries": 3})
        self.assertEqual(
            result.fixes,
            (
                FIX_STRIP_COMMENTS,
                FIX_SINGLE_QUOTES,
                FIX_UNQUOTED_KEYS,
                FIX_TRAILING_COMMAS,
                FIX_UNQUOTED_VALUES,
            ),
        )

    def test_duplicate_keys_last_wins(self):
        self.assertEqual(jsonmend.repair('{"a": 1, "a": 2}').data, {"a": 2})

    def test_unicode_preserved_in_formatted(self):
        result = jsonmend.repair("{'s': 'café'}")
        self.assertIn("café", result.formatted)

    def test_bare_nan_value_becomes_string(self):
        self.assertEqual(jsonmend.repair('{"a": NaN}').data, {"a": "NaN"})

    def test_embedded_string_fix_reported(self):
        result = jsonmend.repair('{"req": "{\'k\': 1}"}')
        self.assertEqual(result.data, {"req": {"k": 1}})
        self.assertEqual(result.fixes, (FIX_EMBEDDED_STRINGS,))

    def test_revival_disabled(self):
        config = RepairConfig.conservative()
        result = jsonmend.repair('{"req": "[1, 2]"}', config)
        self.assertEqual(result.data, {"req": "[1, 2]"})
        self.assertEqual(result.fixes, ())

    def test_custom_indent(self):
        result = jsonmend.repair("[1]", RepairConfig(indent=4))
        self.assertEqual(result.formatted, "[\n    1\n]")

    def test_formatted_matches_data(self):
        result = jsonmend.repair("{a: [1, 2,], b: {c: null}}")
        self.assertEqual(json.loads(result.formatted), result.data)


class TestRepairFailure(unittest.TestCase):
    """Test inputs that cannot be repaired."""

    def test_unrecoverable(self):
        result = jsonmend.repair("{not json at all")
        self.assertFalse(result.success)
        self.assertIsNone(result.data)
        self.assertEqual(result.formatted, "")
        self.assertEqual(len(result.errors), 1)
        self.assertIn("Expecting property name", result.errors[0])
        self.assertIn("line 1, column 2", result.errors[0])

    def test_empty_input(self):
        result = jsonmend.repair("")
        self.assertFalse(result.success)
        self.assertTrue(result.errors)

    def test_fixes_reported_on_failure(self):
        result = jsonmend.repair("{'a': 1,, }")
        self.assertFalse(result.success)
        self.assertIn(FIX_SINGLE_QUOTES, result.fixes)

    def test_bare_nan_rejected(self):
        result = jsonmend.repair("[NaN]")
        self.assertFalse(result.success)
        self.assertIn("NaN", result.errors[0])

    def test_input_size_limit(self):
        config = RepairConfig(limits=RepairLimits(max_input_size=10))
        result = jsonmend.repair('["' + "x" * 20 + '"]', config)
        self.assertFalse(result.success)
        self.assertIn("exceeds limit 10", result.errors[0])

    def test_excessive_nesting(self):
        result = jsonmend.repair("[" * 100000 + "]" * 100000)
        self.assertFalse(result.success)
        self.assertEqual(result.errors, ("Maximum nesting depth exceeded",))


class TestConvenienceFunctions(unittest.TestCase):
    """Test minify() and format_json()."""

    def test_minify(self):
        self.assertEqual(jsonmend.minify("{a: 1, b: [1, 2]}"), '{"a":1,"b":[1,2]}')

    def test_minify_failure_returns_input(self):
        self.assertEqual(jsonmend.minify("{not json"), "{not json")

    def test_format_json(self):
        self.assertEqual(jsonmend.format_json("{a: 1}", 4), '{\n    "a": 1\n}')

    def test_format_json_zero_indent_is_compact(self):
        self.assertEqual(jsonmend.format_json("{a: 1}", 0), '{"a":1}')

    def test_format_json_failure_returns_input(self):
        self.assertEqual(jsonmend.format_json("nope {", 4), "nope {")

    def test_format_json_negative_indent(self):
        with self.assertRaises(ValueError):
            jsonmend.format_json("{}", -1)
        with self.assertRaises(ValueError):
            jsonmend.format_json("{not json", -2)


class TestRepairResult(unittest.TestCase):
    """Test the result value object."""

    def test_to_dict(self):
        result = RepairResult(success=True, data=[1], formatted="[1]", fixes=("x",))
        self.assertEqual(
            result.to_dict(),
            {"success": True, "data": [1], "formatted": "[1]", "errors": [], "fixes": ["x"]},
        )

    def test_to_dict_serializable(self):
        result = jsonmend.repair("{a: 1,}")
        self.assertEqual(json.loads(json.dumps(result.to_dict()))["data"], {"a": 1})

    def test_frozen(self):
        result = RepairResult(success=False)
        with self.assertRaises(AttributeError):
            result.success = True  # type: ignore[misc]


class TestEngineReuse(unittest.TestCase):
    """Test that an engine carries no state between calls."""

    def test_independent_calls(self):
        engine = RepairEngine()
        first = engine.repair("{a: 1,}")
        second = engine.repair('{"b": 2}')
        self.assertEqual(second.fixes, ())
        self.assertEqual(first.data, {"a": 1})

    def test_loads_strict_rejects_constants(self):
        for text in ["NaN", "Infinity", "-Infinity"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    loads_strict(text)


if __name__ == "__main__":
    unittest.main()
