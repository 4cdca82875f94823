"""
Test cases for single-quote normalization.
"""

import json
import unittest

from jsonmend.preprocessing.normalizers import QuoteUnifier
from jsonmend.utils.config import RepairConfig, StageSettings


class TestQuoteUnifier(unittest.TestCase):
    """Test conversion of single-quoted strings."""

    def setUp(self):
        self.unifier = QuoteUnifier()
        self.config = RepairConfig()

    def unify(self, text):
        return self.unifier.process(text, self.config)

    def test_simple_object(self):
        self.assertEqual(self.unify("{'a': 'b'}"), '{"a": "b"}')

    def test_no_single_quotes_untouched(self):
        text = '{"a": "b"}'
        self.assertIs(self.unify(text), text)

    def test_double_quoted_apostrophe_untouched(self):
        text = '{"a": "it\'s"}'
        self.assertEqual(self.unify(text), text)

    def test_escaped_single_quote(self):
        self.assertEqual(self.unify("{'a': 'it\\'s'}"), '{"a": "it\'s"}')

    def test_embedded_double_quotes_escaped(self):
        result = self.unify("{'html': '<a href=\"x\">'}")
        self.assertEqual(json.loads(result), {"html": '<a href="x">'})

    def test_apostrophe_inside_value(self):
        self.assertEqual(json.loads(self.unify("['don't stop']")), ["don't stop"])

    def test_mixed_quotes(self):
        self.assertEqual(
            json.loads(self.unify("{\"a\": 'x', 'b': \"y\"}")), {"a": "x", "b": "y"}
        )

    def test_disabled(self):
        config = RepairConfig(stages=StageSettings(unify_quotes=False))
        self.assertFalse(self.unifier.should_apply(config))


if __name__ == "__main__":
    unittest.main()
