"""
Test cases for schema normalization.

Tests cover chart alias resolution, per-point coercion and analysis pillar
splitting.
"""

import unittest

from lifekline.schema.aliases import probe_aliases, probe_nested
from lifekline.schema.normalizer import (
    SchemaNormalizer,
    normalize_parsed_data,
    split_pillars,
)
from lifekline.schema.values import ValueKind, kind_of, to_finite_number


def _normalizer():
    return SchemaNormalizer(current_year=lambda: 2024)


class TestValueKinds(unittest.TestCase):
    """Test value tagging and numeric conversion."""

    def test_kind_of(self):
        self.assertIs(kind_of(None), ValueKind.NULL)
        self.assertIs(kind_of(True), ValueKind.BOOLEAN)
        self.assertIs(kind_of(3), ValueKind.NUMBER)
        self.assertIs(kind_of(2.5), ValueKind.NUMBER)
        self.assertIs(kind_of("x"), ValueKind.TEXT)
        self.assertIs(kind_of([1]), ValueKind.SEQUENCE)
        self.assertIs(kind_of({"a": 1}), ValueKind.MAPPING)
        self.assertIs(kind_of(object()), ValueKind.OTHER)

    def test_to_finite_number(self):
        self.assertEqual(to_finite_number(" 42 "), 42.0)
        self.assertEqual(to_finite_number(7), 7.0)
        self.assertIsNone(to_finite_number("abc"))
        self.assertIsNone(to_finite_number(""))
        self.assertIsNone(to_finite_number("NaN"))
        self.assertIsNone(to_finite_number("1e999"))
        self.assertIsNone(to_finite_number(True))
        self.assertIsNone(to_finite_number(None))
        self.assertIsNone(to_finite_number(10 ** 400))


class TestAliases(unittest.TestCase):
    """Test alias probing."""

    def test_priority_order(self):
        data = {"points": [2], "chart": [1]}
        self.assertEqual(probe_aliases(("chart", "points"), data), ("chart", [1]))

    def test_null_value_is_skipped(self):
        data = {"chartData": None, "chart": [1]}
        self.assertEqual(probe_aliases(("chartData", "chart"), data), ("chart", [1]))

    def test_nested_result_container(self):
        data = {"result": {"kline": [1]}}
        self.assertEqual(probe_nested(("chart", "kline"), data), ("kline", [1]))

    def test_top_level_wins_over_nested(self):
        data = {"chart": [1], "result": {"chartData": [2]}}
        self.assertEqual(probe_nested(("chartData", "chart"), data), ("chart", [1]))

    def test_no_match(self):
        self.assertEqual(probe_nested(("chart",), {"other": 1}), (None, None))
        self.assertEqual(probe_nested(("chart",), [1, 2]), (None, None))


class TestChartResolution(unittest.TestCase):
    """Test locating the chart under its aliases."""

    def test_non_mapping_returned_unchanged(self):
        self.assertEqual(normalize_parsed_data([1, 2]), [1, 2])
        self.assertEqual(normalize_parsed_data("text"), "text")

    def test_alias_copied_to_canonical_key(self):
        result = _normalizer().normalize({"kline": [{"age": 1, "year": 1990}]})
        self.assertEqual(len(result["chartData"]), 1)
        self.assertEqual(result["chartData"][0]["age"], 1)
        self.assertIn("kline", result)

    def test_nested_result_chart(self):
        result = _normalizer().normalize({"result": {"chart_points": [{"age": 3}]}})
        self.assertEqual(result["chartData"][0]["age"], 3)

    def test_text_encoded_chart(self):
        data = {"chartData": '[{"age": 1, "year": 1990, "open": 50},]'}
        result = _normalizer().normalize(data)
        self.assertEqual(result["chartData"][0]["open"], 50)

    def test_text_chart_with_prose(self):
        data = {"chartData": 'Chart follows: [{"age": 2}] end'}
        result = _normalizer().normalize(data)
        self.assertEqual(result["chartData"][0]["age"], 2)

    def test_unparseable_text_chart_is_dropped(self):
        result = _normalizer().normalize({"chartData": "no chart here"})
        self.assertEqual(result["chartData"], "no chart here")

    def test_deeply_nested_text_chart_is_dropped(self):
        text = "[" * 100000 + "]" * 100000
        result = _normalizer().normalize({"chartData": text})
        self.assertEqual(result["chartData"], text)

    def test_single_mapping_is_wrapped(self):
        result = _normalizer().normalize({"chart": {"age": 5, "open": "10"}})
        self.assertEqual(len(result["chartData"]), 1)
        self.assertEqual(result["chartData"][0]["open"], 10)
        self.assertEqual(result["chartData"][0]["year"], 2024)

    def test_input_is_not_mutated(self):
        data = {"chart": [{"age": "1"}]}
        _normalizer().normalize(data)
        self.assertEqual(data, {"chart": [{"age": "1"}]})


class TestPointCoercion(unittest.TestCase):
    """Test per-point defaults and conversions."""

    def test_numeric_text_and_high_fallback(self):
        point = _normalizer().normalize_point({"open": "50", "high": "abc"})
        self.assertEqual(point["open"], 50)
        self.assertEqual(point["high"], 50)
        self.assertEqual(point["low"], 50)
        self.assertEqual(point["close"], 0)

    def test_high_falls_back_to_close(self):
        point = _normalizer().normalize_point({"close": 61.5})
        self.assertEqual(point["high"], 61.5)
        self.assertEqual(point["low"], 61.5)
        self.assertEqual(point["open"], 0)

    def test_missing_fields_get_defaults(self):
        point = _normalizer().normalize_point({})
        self.assertEqual(point["age"], 0)
        self.assertEqual(point["year"], 2024)
        self.assertEqual(point["score"], 0)
        self.assertEqual(point["high"], 0)
        self.assertEqual(point["reason"], "")
        self.assertEqual(point["ganZhi"], "")
        self.assertEqual(point["daYun"], "")

    def test_integral_fields_truncate(self):
        point = _normalizer().normalize_point({"age": "12.7", "year": 1990.0})
        self.assertEqual(point["age"], 12)
        self.assertEqual(point["year"], 1990)

    def test_non_text_reason_is_cleared(self):
        point = _normalizer().normalize_point({"reason": 5, "ganZhi": "甲子"})
        self.assertEqual(point["reason"], "")
        self.assertEqual(point["ganZhi"], "甲子")

    def test_text_point_is_parsed(self):
        point = _normalizer().normalize_point('{"age": 4, "score": "7"}')
        self.assertEqual(point["age"], 4)
        self.assertEqual(point["score"], 7)

    def test_non_mapping_point_is_kept(self):
        self.assertEqual(_normalizer().normalize_point(3), 3)
        self.assertEqual(_normalizer().normalize_point("not json"), "not json")

    def test_extra_fields_survive(self):
        point = _normalizer().normalize_point({"age": 1, "note": "keep"})
        self.assertEqual(point["note"], "keep")


class TestAnalysis(unittest.TestCase):
    """Test pillar and score normalization in the analysis mapping."""

    def test_split_pillars_mixed_separators(self):
        self.assertEqual(split_pillars("甲子，乙丑 丙寅,丁卯"), ["甲子", "乙丑", "丙寅", "丁卯"])
        self.assertEqual(split_pillars("  "), [])

    def test_text_bazi_is_split(self):
        result = _normalizer().normalize({"analysis": {"bazi": "甲子 乙丑 丙寅 丁卯"}})
        self.assertEqual(result["analysis"]["bazi"], ["甲子", "乙丑", "丙寅", "丁卯"])

    def test_scalar_bazi_is_wrapped(self):
        result = _normalizer().normalize_analysis({"bazi": 7})
        self.assertEqual(result["bazi"], [7])

    def test_null_bazi_stays_null(self):
        result = _normalizer().normalize_analysis({"bazi": None})
        self.assertIsNone(result["bazi"])

    def test_category_scores_coerced(self):
        result = _normalizer().normalize_analysis({"wealthScore": "8", "healthScore": "n/a"})
        self.assertEqual(result["wealthScore"], 8)
        self.assertEqual(result["healthScore"], "n/a")


if __name__ == "__main__":
    unittest.main()
