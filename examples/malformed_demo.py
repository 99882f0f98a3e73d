"""
Demonstration of lifekline's handling of malformed model output.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import lifekline
from lifekline import LifeKlineError


def main():
    print("lifekline - Malformed Model Output Demo")
    print("=" * 50)

    examples = [
        ('###JSON_START### {"a": [1, 2,],} ###JSON_END###', "Markers with trailing commas"),
        ('Sure! {"chart": [{"age": 1}]} Anything else?', "JSON surrounded by prose"),
        ("{'name': 'Alice', 'tags': ['a', 'b',]}", "Single-quoted literals"),
        ("{ unbalanced: [1, 2, 3,]", "Unbalanced object before an array"),
        ('{"chartData": "[{\\"age\\": 1}]"}', "Chart encoded as a JSON string"),
        ("I'm sorry, I can't help with that.", "Refusal without JSON"),
        ("{chartData: 12}", "Unquoted keys (not repaired)"),
    ]

    for i, (text, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {repr(text)}")
        try:
            parsed = lifekline.parse_model_json(text)
            print(f"Output: {parsed}")
            print(f"Normalized: {lifekline.normalize_parsed_data(parsed)}")
        except LifeKlineError as e:
            print(f"Error:  [{e.category}] {e.message}")

    print("\n" + "=" * 50)
    print("Schema failure with debug snapshot:")
    try:
        lifekline.parse_life_analysis('{"chartData": [], "analysis": {"bazi": "甲子"}}')
    except LifeKlineError as e:
        print(e)


if __name__ == "__main__":
    main()
