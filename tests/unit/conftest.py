"""단위 테스트 공용 Fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _clear_config_cache():
    from newslens.domain.config import get_config

    get_config.cache_clear()
    yield
    get_config.cache_clear()
