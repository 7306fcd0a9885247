"""기본 타입 정의 - 서비스 전체에서 공유하는 Annotated 타입."""

from typing import Annotated

from pydantic import AfterValidator, Field

# 티커 심볼: 대문자 정규화 (예: "AAPL", "BTC")
Symbol = Annotated[str, Field(min_length=1, max_length=20), AfterValidator(lambda v: v.strip().upper())]

# 관련도: 0~1 범위
Relevance = Annotated[float, Field(ge=0, le=1)]

# 점수: 0~100 범위 실수
Score = Annotated[float, Field(ge=0, le=100)]

# 헬스 스코어: 0~100 정수
HealthValue = Annotated[int, Field(ge=0, le=100)]
