"""
lifekline demonstration script.

Runs the full pipeline offline: a canned transport stands in for the chat
completion API, so no key or network access is needed.
"""

import json
import logging

import lifekline
from lifekline import Gender, UserInput

CANNED_REPLY = """好的，以下是分析结果：
###JSON_START###
```json
{
  "chartData": [
    {"age": 1, "year": 1990, "ganZhi": "庚午", "daYun": "童限", "open": 50, "close": 54, "high": 57, "low": 48, "score": 6, "reason": "起步平稳"},
    {"age": 2, "year": 1991, "ganZhi": "辛未", "daYun": "童限", "open": 54, "close": 51, "high": 56, "low": 49, "score": 5, "reason": "小有波折"},
  ],
  "analysis": {
    "bazi": "庚午，辛巳 甲子,丙寅",
    "summary": "先抑后扬", "summaryScore": "7",
    "wealth": "中年渐丰", "wealthScore": 6
  }
}
```
###JSON_END###
祝您顺利！"""


class CannedTransport:
    def complete(self, messages):
        print(f"Prompt sent ({len(messages[1]['content'])} chars), returning canned reply")
        return CANNED_REPLY


def main():
    logging.basicConfig(level=logging.INFO)
    print("lifekline - Life K-line Analysis Demo")
    print("=" * 40)

    user = UserInput(
        gender=Gender.MALE,
        year_pillar="庚午",
        month_pillar="辛巳",
        day_pillar="甲子",
        hour_pillar="丙寅",
        start_age="3",
        first_da_yun="壬午",
        birth_year="1990",
    )

    result = lifekline.generate_life_analysis(user, transport=CannedTransport())

    print(f"\nPillars: {result.analysis.bazi}")
    for point in result.chart_data:
        print(
            f"  age {point.age:>3} ({point.year}) "
            f"O={point.open} C={point.close} H={point.high} L={point.low} {point.reason}"
        )
    print(f"Summary: {result.analysis['summary'].text} ({result.analysis['summary'].score})")

    print("\nCanonical JSON:")
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
