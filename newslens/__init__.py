"""newslens - 포트폴리오 뉴스 알림 + 헬스 스코어 + 채팅 스트림."""

__version__ = "1.0.0"
