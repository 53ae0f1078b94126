"""
LLM-written narrative of a period's spending.
"""
from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from app.schemas.analytics import NarrativeRequest

logger = logging.getLogger(__name__)


class NarrativeError(Exception):
    pass


def build_prompt(req: NarrativeRequest) -> str:
    span = "주간" if req.view_mode == "weekly" else "월간"
    next_unit = "주" if req.view_mode == "weekly" else "달"
    stat_lines = "\n".join(
        f"- {s.category_name}: {s.total_amount:,}원 ({s.percentage:.1f}%, {s.item_count}건)"
        for s in req.stats
    )
    return f"""당신은 가계부 분석 전문가입니다. 다음 {span} 지출 데이터를 분석하고 인사이트를 제공해주세요.

**기간**: {req.period}
**총 지출**: {req.total_amount:,}원

**카테고리별 지출:**
{stat_lines}

다음 항목들을 포함하여 한국어로 상세히 분석해주세요:

1. **전체 지출 패턴 분석**
   - 총 지출 금액에 대한 평가 (많은지, 적절한지)
   - {span} 지출로서 적정 수준인지

2. **카테고리별 분석**
   - 가장 많이 지출한 카테고리와 그 이유 추정
   - 각 카테고리 지출이 합리적인지 평가
   - 이상 지출 패턴 감지 (너무 높거나 낮은 항목)

3. **절약 제안**
   - 줄일 수 있는 지출 카테고리
   - 구체적인 절약 방법 3가지

4. **예산 추천**
   - 다음 {next_unit}에 적정한 총 예산
   - 카테고리별 권장 예산 배분

5. **종합 평가**
   - 전반적인 소비 습관 평가
   - 개선이 필요한 부분

응답은 이모지를 적절히 활용하여 읽기 쉽게 작성해주세요. 마크다운 형식으로 작성하되, 각 섹션을 명확히 구분해주세요."""


class Narrator:
    def __init__(self, client: Optional[OpenAI], model: str, max_tokens: int = 2048):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings) -> "Narrator":
        client = OpenAI(api_key=settings.LLM_API_KEY) if settings.LLM_API_KEY else None
        return cls(client, settings.LLM_MODEL, settings.LLM_MAX_TOKENS)

    def analyze(self, req: NarrativeRequest) -> str:
        if self.client is None:
            raise NarrativeError("LLM_API_KEY is not configured")
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": build_prompt(req)}],
            )
        except OpenAIError as e:
            raise NarrativeError(str(e)) from e
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
