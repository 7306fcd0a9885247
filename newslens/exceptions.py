"""newslens 예외 계층."""


class NewsLensError(Exception):
    """newslens 공통 예외."""


class FeedFetchError(NewsLensError):
    """피드 수집/파싱 실패 (피드 단위로 격리, 호출자에게 전파되지 않음)."""

    def __init__(self, feed_id: str, message: str):
        super().__init__(f"[{feed_id}] {message}")
        self.feed_id = feed_id


class AdvisorBusyError(NewsLensError):
    """AI 호출 재시도 소진 - 사용자에게 '일시적으로 바쁨'으로 노출."""

    def __init__(self, message: str = "Our AI advisors are currently busy. Please try again in a few moments."):
        super().__init__(message)


class MalformedResponseError(NewsLensError):
    """AI 응답이 비었거나 형식 불일치."""
