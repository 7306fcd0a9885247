"""채팅 백엔드 스트리밍 클라이언트.

요청: {message, marketMode, cryptoMode, sessionId, history[-6:]}
응답: NDJSON {type, text} 스트림 -> StreamAssembler
"""

import logging
from collections.abc import AsyncIterator, Callable

import httpx

from newslens.domain.chat import ChatMessage, ChatRequest, HistoryTurn
from newslens.domain.config import ChatConfig, get_config
from newslens.domain.enums import ChatRole

from .stream import StreamAssembler

logger = logging.getLogger(__name__)


def build_request(
    message: str,
    history: list[ChatMessage],
    *,
    market_mode: bool = False,
    crypto_mode: bool = False,
    session_id: str = "portfolio-chat",
    history_turns: int = 6,
) -> ChatRequest:
    """직전 대화 history_turns 턴만 포함 (현재 메시지 제외)."""
    recent = history[-history_turns:] if history_turns > 0 else []
    return ChatRequest(
        message=message,
        market_mode=market_mode,
        crypto_mode=crypto_mode,
        session_id=session_id,
        history=[HistoryTurn(role=m.role, content=m.content) for m in recent],
    )


class ChatStreamClient:
    """채팅 백엔드 호출 + assistant 메시지 스트리밍 갱신.

    Args:
        client: 공유 httpx.AsyncClient (없으면 내부 생성)
        config: 채팅 설정 (기본: get_config().chat)
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: ChatConfig | None = None,
    ):
        self._config = config or get_config().chat
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(30.0, read=None))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(
        self,
        message: str,
        history: list[ChatMessage],
        *,
        market_mode: bool = False,
        crypto_mode: bool = False,
        on_update: Callable[[str], None] | None = None,
    ) -> ChatMessage:
        """메시지 전송. history 에 user/assistant 메시지를 추가하고 assistant 메시지 반환.

        전송 실패 시 assistant 메시지는 fallback 문구로 교체된다 (예외 없음).
        """
        request = build_request(
            message,
            history,
            market_mode=market_mode,
            crypto_mode=crypto_mode,
            session_id=self._config.session_id,
            history_turns=self._config.history_turns,
        )

        history.append(ChatMessage(role=ChatRole.USER, content=message))
        reply = ChatMessage(role=ChatRole.ASSISTANT)
        history.append(reply)

        assembler = StreamAssembler(reply, on_update=on_update)
        await assembler.consume(self._stream(request), timeout=self._config.stream_timeout)
        return reply

    async def _stream(self, request: ChatRequest) -> AsyncIterator[bytes]:
        payload = request.model_dump(mode="json", by_alias=True)
        async with self._client.stream("POST", self._config.backend_url, json=payload) as resp:
            resp.raise_for_status()
            logger.debug("Chat stream opened: session=%s", request.session_id)
            async for chunk in resp.aiter_bytes():
                yield chunk
