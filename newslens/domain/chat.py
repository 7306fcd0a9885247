"""채팅 모델 - 메시지, 백엔드 요청, 스트림 레코드."""

from pydantic import BaseModel, Field, PrivateAttr

from .enums import ChatRole


class ChatMessage(BaseModel):
    """채팅 메시지.

    assistant 메시지는 빈 상태로 생성 -> 스트림 동안 in-place 갱신 -> 종료 시 freeze.
    """

    role: ChatRole
    content: str = ""

    _frozen: bool = PrivateAttr(default=False)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def update(self, content: str) -> None:
        if self._frozen:
            raise RuntimeError("ChatMessage is frozen")
        self.content = content

    def freeze(self) -> None:
        self._frozen = True


class HistoryTurn(BaseModel):
    """요청에 포함되는 과거 대화 한 턴."""

    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    """채팅 백엔드 요청 바디 (camelCase 직렬화)."""

    model_config = {"populate_by_name": True}

    message: str
    market_mode: bool = Field(default=False, alias="marketMode")
    crypto_mode: bool = Field(default=False, alias="cryptoMode")
    session_id: str = Field(default="portfolio-chat", alias="sessionId")
    history: list[HistoryTurn] = []


class StreamRecord(BaseModel):
    """NDJSON 스트림의 한 레코드. type == "content" 만 본문에 반영."""

    model_config = {"extra": "ignore"}

    type: str
    text: str = ""
