"""Structured logging - stdlib logger 출력에 structlog 포매터 + 갱신 컨텍스트.

모듈 코드는 logging.getLogger(__name__) 를 그대로 쓰고, 갱신 주기/피드 단위 컨텍스트는
log_context 로 contextvars 에 바인딩한다. asyncio task 는 생성 시점 컨텍스트를 복사하므로
피드별 fetch task 안에서 바인딩한 값은 다른 피드 로그에 섞이지 않는다.

Usage:
    setup_logging("news-alerts", json_output=True)

    with log_context(refresh="AAPL,BTC", holdings=2):
        logger.info("Refresh done")  # {"refresh": "AAPL,BTC", "holdings": 2, ...}
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

# 요청마다 INFO 로그를 남기는 라이브러리 (피드 10개 x 갱신 주기)
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def setup_logging(
    service_name: str = "newslens",
    *,
    log_level: str = "INFO",
    json_output: bool = True,
) -> None:
    """root logger 에 structlog 포매터 핸들러 설치 + 서비스 이름 바인딩.

    lifespan 에서 여러 번 호출돼도 핸들러는 하나만 유지한다.

    Args:
        service_name: 로그의 service 필드
        log_level: DEBUG / INFO / WARNING / ERROR
        json_output: False 면 콘솔 렌더러 (로컬 개발용)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False) if json_output else structlog.dev.ConsoleRenderer()
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=_processors(),
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)


@contextmanager
def log_context(**values: object) -> Iterator[None]:
    """블록 안의 모든 로그에 values 를 필드로 추가 (종료 시 이전 값 복원)."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
