"""News Alerts API 단위 테스트 - TestClient + dependency override."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from newslens.domain.config import get_config
from newslens.domain.news import Alert
from newslens.domain.portfolio import HealthScore
from newslens.exceptions import AdvisorBusyError
from newslens.infra.store import InMemoryStore
from newslens.services.news.alert_cache import AlertCache
from newslens.services.news.pipeline import RefreshResult


@pytest.fixture
def app_env(monkeypatch):
    monkeypatch.setenv("APP_STORE_BACKEND", "memory")
    monkeypatch.setenv("APP_JSON_LOGS", "false")
    from newslens.services import deps
    from newslens.services.news.app import app, get_pipeline

    deps.get_store.cache_clear()
    deps.get_advisor.cache_clear()
    yield app, get_pipeline
    app.dependency_overrides.clear()
    deps.get_store.cache_clear()
    deps.get_advisor.cache_clear()


def _alert(title: str = "Apple beats", age_hours: float = 1) -> Alert:
    return Alert(
        id=f"AAPL-{title}",
        symbol="AAPL",
        title=title,
        sentiment="positive",
        timestamp=datetime.now(UTC) - timedelta(hours=age_hours),
        relevance_score=0.6,
    )


HOLDINGS = [{"symbol": "aapl", "quantity": 10, "avg_price": 100, "current_value": 1200, "daily_change_percent": 1.5}]


class TestHealthEndpoint:
    def test_health(self, app_env, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        get_config.cache_clear()
        app, _ = app_env
        with TestClient(app) as client:
            resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["service"] == "news-alerts"
        assert body["store"] == {"backend": "memory", "cached_alerts": 0, "status": "healthy"}
        assert body["feeds"]["registered"] == 10
        assert body["feeds"]["unknown"] == []
        # LLM 키 없음 -> degraded
        assert body["dependencies"]["llm"]["status"] == "degraded"
        assert body["status"] == "degraded"

    def test_unknown_feed_ids_degrade(self, app_env, monkeypatch):
        monkeypatch.setenv("FEED_SELECTED_IDS", "et-market,not-a-feed")
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
        get_config.cache_clear()
        app, _ = app_env
        with TestClient(app) as client:
            body = client.get("/health").json()
        assert body["feeds"]["selected"] == ["et-market"]
        assert body["feeds"]["unknown"] == ["not-a-feed"]
        assert body["status"] == "degraded"


class TestRefreshEndpoint:
    def test_refresh(self, app_env):
        app, get_pipeline = app_env
        pipeline = MagicMock()
        pipeline.refresh = AsyncMock(return_value=RefreshResult(alerts=[_alert()], health=HealthScore(score=72)))
        app.dependency_overrides[get_pipeline] = lambda: pipeline

        with TestClient(app) as client:
            resp = client.post("/refresh", json={"holdings": HOLDINGS})

        assert resp.status_code == 200
        body = resp.json()
        assert body["alerts"][0]["relevanceScore"] == 0.6
        assert body["health"]["score"] == 72
        assert body["band"] == "Moderate"
        assert body["summary"].startswith("Since yesterday, your portfolio is up 1.5%")
        assert body["degraded"] is False
        holdings = pipeline.refresh.call_args.args[0]
        assert holdings[0].symbol == "AAPL"

    def test_new_alerts_triaged_in_background(self, app_env):
        app, get_pipeline = app_env
        from newslens.services.deps import get_notification_sink, get_triage_advisor

        new = [_alert("Apple lawsuit")]
        pipeline = MagicMock()
        pipeline.refresh = AsyncMock(
            return_value=RefreshResult(alerts=new, health=HealthScore(score=40), new_alerts=new)
        )
        advisor = MagicMock()
        advisor.triage_alerts = AsyncMock(return_value=[])
        sink = MagicMock()
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        app.dependency_overrides[get_triage_advisor] = lambda: advisor
        app.dependency_overrides[get_notification_sink] = lambda: sink

        with TestClient(app) as client:
            resp = client.post("/refresh", json={"holdings": HOLDINGS})

        assert resp.status_code == 200
        advisor.triage_alerts.assert_awaited_once_with(new, sink)

    def test_triage_disabled_without_llm_key(self, app_env, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        get_config.cache_clear()
        from newslens.services.deps import get_triage_advisor

        assert get_triage_advisor() is None

    def test_invalid_holding_rejected(self, app_env):
        app, get_pipeline = app_env
        app.dependency_overrides[get_pipeline] = lambda: MagicMock()
        with TestClient(app) as client:
            resp = client.post("/refresh", json={"holdings": [{"symbol": "AAPL", "quantity": -1, "avg_price": 1}]})
        assert resp.status_code == 422


class TestAlertsEndpoint:
    def test_cached_alerts(self, app_env):
        app, _ = app_env
        from newslens.services.deps import get_alert_cache

        cache = AlertCache(InMemoryStore())
        cache.merge({"AAPL"}, [_alert("fresh"), _alert("stale", age_hours=60)])
        app.dependency_overrides[get_alert_cache] = lambda: cache

        with TestClient(app) as client:
            resp = client.get("/alerts")

        assert resp.status_code == 200
        assert [a["title"] for a in resp.json()] == ["fresh"]


class TestHealthScoreEndpoint:
    def test_worked_example(self, app_env):
        app, _ = app_env
        with TestClient(app) as client:
            resp = client.post("/health-score", json={"holdings": HOLDINGS, "alerts": []})
        assert resp.status_code == 200
        assert resp.json()["health"]["score"] == 57

    def test_empty_portfolio(self, app_env):
        app, _ = app_env
        with TestClient(app) as client:
            resp = client.post("/health-score", json={})
        assert resp.json()["health"]["score"] == 100
        assert resp.json()["band"] == "Stable"


class TestAdviceEndpoint:
    def test_advice(self, app_env):
        app, _ = app_env
        from newslens.services.deps import get_advisor

        advisor = MagicMock()
        advisor.advise_on_news = AsyncMock(return_value="Hold.")
        app.dependency_overrides[get_advisor] = lambda: advisor

        with TestClient(app) as client:
            resp = client.post("/advice", json={"symbol": "AAPL", "title": "Apple beats", "holdings": HOLDINGS})

        assert resp.status_code == 200
        assert resp.json() == {"content": "Hold."}

    def test_busy_maps_to_503(self, app_env):
        app, _ = app_env
        from newslens.services.deps import get_advisor

        advisor = MagicMock()
        advisor.advise_on_news = AsyncMock(side_effect=AdvisorBusyError())
        app.dependency_overrides[get_advisor] = lambda: advisor

        with TestClient(app) as client:
            resp = client.post("/advice", json={"symbol": "AAPL", "title": "t"})

        assert resp.status_code == 503
        assert "currently busy" in resp.json()["detail"]

    def test_insight(self, app_env):
        app, _ = app_env
        from newslens.services.deps import get_advisor

        advisor = MagicMock()
        advisor.portfolio_insight = AsyncMock(return_value="Diversify.")
        app.dependency_overrides[get_advisor] = lambda: advisor

        with TestClient(app) as client:
            resp = client.post("/insight", json={"holdings": HOLDINGS, "simple": True})

        assert resp.json() == {"content": "Diversify."}
        assert advisor.portfolio_insight.call_args.kwargs["simple"] is True
