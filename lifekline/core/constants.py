"""
Common constants and field names used across the lifekline library.
"""

CANONICAL_CHART_KEY = "chartData"
# Older prompt revisions asked for chartPoints; the validator still accepts it.
LEGACY_CHART_KEY = "chartPoints"
RESULT_CONTAINER_KEY = "result"

INTEGRAL_POINT_FIELDS = ("age", "year")
PRICE_POINT_FIELDS = ("open", "close", "high", "low", "score")

ANALYSIS_CATEGORIES = (
    "summary",
    "industry",
    "wealth",
    "marriage",
    "health",
    "family",
)

BAZI_SEPARATOR_PATTERN = r"[,，\s]+"

YANG_STEMS = ("甲", "丙", "戊", "庚", "壬")
YIN_STEMS = ("乙", "丁", "己", "辛", "癸")
