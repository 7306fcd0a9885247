"""Stream Assembler - NDJSON 바이트 청크 -> 누적 assistant 메시지.

청크 경계는 임의. 줄 단위로 잘라 JSON 파싱하고 마지막 미완성 조각은 다음 청크까지 보류.
파싱 실패 줄은 조용히 버린다 (복구 불가한 부분 레코드로 간주).

Usage:
    reply = ChatMessage(role=ChatRole.ASSISTANT)
    assembler = StreamAssembler(reply, on_update=print)
    text = await assembler.consume(response.aiter_bytes())
"""

import asyncio
import codecs
import json
import logging
from collections.abc import AsyncIterable, Callable

from pydantic import ValidationError

from newslens.domain.chat import ChatMessage, StreamRecord
from newslens.domain.enums import ChatRole

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "I'm sorry, I'm having trouble connecting right now."
CONTENT_TYPE = "content"


class StreamAssembler:
    """단일 소비 루프. 외부 취소 시 루프만 중단 (CancelledError 전파).

    Args:
        message: in-place 갱신할 assistant 메시지 (없으면 새로 생성)
        on_update: 누적 텍스트가 바뀔 때마다 호출
    """

    def __init__(
        self,
        message: ChatMessage | None = None,
        on_update: Callable[[str], None] | None = None,
    ):
        self.message = message or ChatMessage(role=ChatRole.ASSISTANT)
        self._on_update = on_update
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def feed(self, chunk: bytes | str) -> str:
        """청크 추가 -> 완성된 줄 처리. 현재 누적 텍스트 반환."""
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk)
        self._buffer += chunk

        *lines, self._buffer = self._buffer.split("\n")
        for line in lines:
            self._handle_line(line.strip())
        return self._text

    def _handle_line(self, line: str) -> None:
        if not line:
            return
        try:
            record = StreamRecord.model_validate(json.loads(line))
        except (ValueError, ValidationError):
            logger.debug("Discarding unparsable stream line: %.80s", line)
            return

        if record.type != CONTENT_TYPE or not record.text:
            return
        self._text += record.text
        self.message.update(self._text)
        if self._on_update:
            self._on_update(self._text)

    def fail(self, error: BaseException | None = None) -> str:
        """전송 실패 - 부분 텍스트를 버리고 고정 안내 문구로 교체."""
        logger.warning("Chat stream failed: %s", error)
        self._text = FALLBACK_MESSAGE
        self.message.update(FALLBACK_MESSAGE)
        if self._on_update:
            self._on_update(FALLBACK_MESSAGE)
        return FALLBACK_MESSAGE

    async def consume(self, chunks: AsyncIterable[bytes], timeout: float | None = None) -> str:
        """청크 소스를 끝까지 소비. 최종 누적 텍스트 (실패 시 fallback) 반환."""
        iterator = aiter(chunks)
        try:
            async with asyncio.timeout(timeout):
                async for chunk in iterator:
                    self.feed(chunk)
        except Exception as e:
            return self.fail(e)
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()
            self.message.freeze()
        return self._text
