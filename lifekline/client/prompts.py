"""
Prompt construction for the life-analysis chat completion.

The user prompt embeds the same sentinel markers that
:class:`~lifekline.preprocessing.extractors.MarkerExtractor` looks for, so
the two must be built from one :class:`~lifekline.utils.config.ParseConfig`.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.constants import YANG_STEMS, YIN_STEMS
from ..utils.config import ParseConfig


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"


class StemPolarity(Enum):
    YANG = "YANG"
    YIN = "YIN"


@dataclass
class UserInput:
    """A birth chart whose four pillars have already been computed."""

    gender: Gender
    year_pillar: str
    month_pillar: str
    day_pillar: str
    hour_pillar: str
    start_age: str = "1"
    first_da_yun: str = ""
    name: str = ""
    birth_year: str = ""

    @property
    def pillars(self) -> list[str]:
        return [self.year_pillar, self.month_pillar, self.day_pillar, self.hour_pillar]

    @property
    def start_age_int(self) -> int:
        try:
            return int(self.start_age) or 1
        except (TypeError, ValueError):
            return 1


BAZI_SYSTEM_INSTRUCTION = (
    "你是一位精通八字命理的分析师。根据用户给出的四柱与大运，"
    "为每一个虚岁年份生成一条人生K线数据（开盘、收盘、最高、最低、评分与理由），"
    "并给出总评与事业、财富、婚姻、健康、六亲各维度的分析和评分（0-10）。"
    "只输出 JSON，不要输出任何解释性文字。"
)

MINIMAL_EXAMPLE = {
    "chartData": [
        {
            "age": 1,
            "year": 1990,
            "ganZhi": "甲子",
            "daYun": "甲子",
            "open": 50,
            "close": 55,
            "high": 60,
            "low": 45,
            "score": 6,
            "reason": "示例：该年有利于学习与积累，注意健康。",
        }
    ],
    "analysis": {
        "bazi": ["甲子", "乙丑", "丙寅", "丁卯"],
        "summary": "示例摘要",
        "summaryScore": 6,
        "industry": "示例",
        "industryScore": 6,
        "wealth": "示例",
        "wealthScore": 6,
        "marriage": "示例",
        "marriageScore": 6,
        "health": "示例",
        "healthScore": 6,
        "family": "示例",
        "familyScore": 6,
    },
}


def get_stem_polarity(pillar: Optional[str]) -> StemPolarity:
    """Polarity of the heavenly stem that starts ``pillar``; YANG when unknown."""
    if not pillar or not pillar.strip():
        return StemPolarity.YANG
    first_char = pillar.strip()[0]
    if first_char in YIN_STEMS:
        return StemPolarity.YIN
    return StemPolarity.YANG


def is_forward(user_input: UserInput) -> bool:
    """Major cycles run forward for yang-year males and yin-year females."""
    polarity = get_stem_polarity(user_input.year_pillar)
    if user_input.gender is Gender.MALE:
        return polarity is StemPolarity.YANG
    return polarity is StemPolarity.YIN


def build_user_prompt(user_input: UserInput, config: Optional[ParseConfig] = None) -> str:
    """Build the user message, wrapping the example payload in sentinel markers."""
    config = config or ParseConfig()
    gender = "男 (乾造)" if user_input.gender is Gender.MALE else "女 (坤造)"
    if is_forward(user_input):
        direction = "顺行 (Forward)"
        direction_example = "例如：第一步是【戊申】，第二步则是【己酉】（顺排）"
    else:
        direction = "逆行 (Backward)"
        direction_example = "例如：第一步是【戊申】，第二步则是【丁未】（逆排）"

    example = json.dumps(MINIMAL_EXAMPLE, ensure_ascii=False)
    lines = [
        "请根据以下**已经排好的**八字四柱和**指定的大运信息**进行分析。",
        "",
        "【基本信息】",
        f"性别：{gender}",
        f"姓名：{user_input.name or '未提供'}",
        f"出生年份：{user_input.birth_year or '未知'}年 (阳历)",
        "",
        "【八字四柱】",
        f"年柱：{user_input.year_pillar}",
        f"月柱：{user_input.month_pillar}",
        f"日柱：{user_input.day_pillar}",
        f"时柱：{user_input.hour_pillar}",
        "",
        "【起运与大运】",
        f"起运年龄（虚岁）：{user_input.start_age_int}",
        f"第一步大运：{user_input.first_da_yun}",
        f"大运方向：{direction}，{direction_example}",
        "",
        "请严格遵守以下要求：",
        "1) 只输出一个合法的 JSON 对象（不要在 JSON 之外输出任何文字说明）。",
        "2) 为便于程序抽取，请把 JSON 用下面的标记包裹（并只在这两个标记之间输出 JSON）：",
        config.start_marker,
        "```json",
        example,
        "```",
        config.end_marker,
        "3) JSON 字段名请严格按模板返回，chartData 必须是数组，analysis.bazi 必须是字符串数组。",
        "4) 避免把数组作为字符串返回；字符串请使用双引号。",
        "5) 如果无法完整生成整套 1-100 岁的数据，请至少保证 chartData 为非空数组并在 analysis 中返回 bazi（数组）。",
    ]
    return "\n".join(lines)


def build_messages(
    user_input: UserInput, config: Optional[ParseConfig] = None
) -> list[dict[str, str]]:
    """System and user messages for one chat-completion request."""
    return [
        {"role": "system", "content": BAZI_SYSTEM_INSTRUCTION},
        {"role": "user", "content": build_user_prompt(user_input, config)},
    ]
