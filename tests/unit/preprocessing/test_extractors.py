"""
Test cases for content extractors.

Tests focus on locating the JSON span inside free-form model output.
"""

import json
import unittest

from lifekline.preprocessing.extractors import (
    BalancedBlockExtractor,
    GreedySpanExtractor,
    MarkerExtractor,
    strip_code_fence,
)


class TestBalancedBlockExtractor(unittest.TestCase):
    """Test bracket-balanced block extraction."""

    def setUp(self):
        self.extractor = BalancedBlockExtractor()

    def test_object_inside_prose(self):
        """Test extraction of an object surrounded by prose."""
        text = 'Here you go: {"a": 1, "b": [1, 2]} hope this helps {"c": 3}'
        self.assertEqual(self.extractor.extract(text), '{"a": 1, "b": [1, 2]}')

    def test_array_before_object(self):
        """Test that the earliest opener wins."""
        text = 'list [1, {"x": 2}] then {"y": 3}'
        self.assertEqual(self.extractor.extract(text), '[1, {"x": 2}]')

    def test_brace_inside_double_quoted_string(self):
        """Test that braces inside string literals are inert."""
        text = 'prefix {"reason": "closing } early", "n": 1} suffix'
        span = self.extractor.extract(text)
        self.assertEqual(span, '{"reason": "closing } early", "n": 1}')
        self.assertEqual(json.loads(span)["n"], 1)

    def test_brace_inside_single_quoted_string(self):
        """Test that single quotes also delimit literals."""
        text = "{'reason': 'a } b', 'n': 1} tail"
        self.assertEqual(self.extractor.extract(text), "{'reason': 'a } b', 'n': 1}")

    def test_escaped_quote_does_not_close_literal(self):
        """Test that a backslash-escaped quote keeps the literal open."""
        text = r'{"reason": "say \"}\" twice", "n": 2} rest'
        self.assertEqual(self.extractor.extract(text), r'{"reason": "say \"}\" twice", "n": 2}')

    def test_unterminated_returns_none(self):
        """Test that an unterminated structure is not returned."""
        self.assertIsNone(self.extractor.extract('{"a": [1, 2'))

    def test_no_opener_returns_none(self):
        """Test text without any bracket."""
        self.assertIsNone(self.extractor.extract("no json here"))
        self.assertIsNone(self.extractor.extract(""))

    def test_nested_structures(self):
        """Test deep nesting is tracked through the stack."""
        text = 'x {"a": {"b": {"c": [[], {}]}}} y'
        self.assertEqual(self.extractor.extract(text), '{"a": {"b": {"c": [[], {}]}}}')

    def test_long_input_scans_linearly(self):
        """Test a large input with many literal braces completes."""
        inner = ", ".join(f'"k{i}": "{{[}}]"' for i in range(5000))
        text = "lead " + "{" + inner + "}" + " trail"
        span = self.extractor.extract(text)
        self.assertTrue(span.startswith("{"))
        self.assertTrue(span.endswith("}"))
        self.assertEqual(len(json.loads(span)), 5000)


class TestMarkerExtractor(unittest.TestCase):
    """Test sentinel marker extraction."""

    def setUp(self):
        self.extractor = MarkerExtractor("###JSON_START###", "###JSON_END###")

    def test_extracts_between_markers(self):
        """Test the embedded text is returned trimmed."""
        text = 'Intro text.\n###JSON_START###\n  {"a": 1}  \n###JSON_END###\nOutro.'
        self.assertEqual(self.extractor.extract(text), '{"a": 1}')

    def test_prose_variations(self):
        """Test arbitrary prose before and after the markers."""
        payload = '{"chartData": [], "analysis": {"bazi": []}}'
        for before, after in [
            ("", ""),
            ("Sure! ", " Anything else?"),
            ("多行\n说明\n", "\n结束"),
            ("{not json} ", " [also not]"),
        ]:
            text = f"{before}###JSON_START###{payload}###JSON_END###{after}"
            self.assertEqual(self.extractor.extract(text), payload)

    def test_missing_end_marker(self):
        """Test that a missing end marker is not applicable."""
        self.assertIsNone(self.extractor.extract('###JSON_START### {"a": 1}'))

    def test_missing_start_marker(self):
        """Test that a missing start marker is not applicable."""
        self.assertIsNone(self.extractor.extract('{"a": 1} ###JSON_END###'))

    def test_end_before_start(self):
        """Test that an end marker preceding the start is ignored."""
        text = '###JSON_END### {"a": 1} ###JSON_START###'
        self.assertIsNone(self.extractor.extract(text))

    def test_first_subsequent_end_marker(self):
        """Test extraction stops at the first end marker after the start."""
        text = "###JSON_START###[1]###JSON_END###[2]###JSON_END###"
        self.assertEqual(self.extractor.extract(text), "[1]")

    def test_code_fence_kept_by_default(self):
        """Test that fences are returned verbatim unless stripping is enabled."""
        text = '###JSON_START###\n```json\n{"a": 1}\n```\n###JSON_END###'
        self.assertEqual(self.extractor.extract(text), '```json\n{"a": 1}\n```')

    def test_code_fence_stripped_when_enabled(self):
        """Test fence stripping of the marker payload."""
        extractor = MarkerExtractor(strip_code_fences=True)
        text = '###JSON_START### ```json {"a": 1} ``` ###JSON_END###'
        self.assertEqual(extractor.extract(text), '{"a": 1}')

    def test_empty_markers_rejected(self):
        """Test that empty sentinel strings are refused."""
        with self.assertRaises(ValueError):
            MarkerExtractor("", "###JSON_END###")


class TestGreedySpanExtractor(unittest.TestCase):
    """Test first-opener to last-closer extraction."""

    def test_object_span(self):
        """Test greedy object extraction spans to the last brace."""
        extractor = GreedySpanExtractor("{", "}")
        self.assertEqual(extractor.name, "greedy_object")
        self.assertEqual(extractor.extract('a {"x": 1} b {"y": 2} c'), '{"x": 1} b {"y": 2}')

    def test_array_span(self):
        """Test greedy array extraction."""
        extractor = GreedySpanExtractor("[", "]")
        self.assertEqual(extractor.name, "greedy_array")
        self.assertEqual(extractor.extract("x [1, 2] y"), "[1, 2]")

    def test_closer_before_opener(self):
        """Test that a closer preceding every opener yields None."""
        extractor = GreedySpanExtractor("{", "}")
        self.assertIsNone(extractor.extract("} only then {"))
        self.assertIsNone(extractor.extract("nothing"))


class TestStripCodeFence(unittest.TestCase):
    """Test markdown fence removal."""

    def test_language_tagged_fence(self):
        self.assertEqual(strip_code_fence('```json\n{"a": 1}\n```'), '{"a": 1}')

    def test_untagged_fence(self):
        self.assertEqual(strip_code_fence("```\n[1]\n```"), "[1]")

    def test_no_fence(self):
        self.assertEqual(strip_code_fence('{"a": 1}'), '{"a": 1}')


if __name__ == "__main__":
    unittest.main()
