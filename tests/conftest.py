import json

import pytest

from recipe_import.app.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.delenv("RECIPE_DEFAULT_TITLE", raising=False)
    monkeypatch.delenv("RECIPE_JSON_LD_MAX_DEPTH", raising=False)
    monkeypatch.delenv("RECIPE_LOG_LEVEL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def json_ld_script(payload) -> str:
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return f'<script type="application/ld+json">{body}</script>'


def make_page(*blocks) -> str:
    return "<html><head>" + "".join(json_ld_script(b) for b in blocks) + "</head><body></body></html>"


@pytest.fixture
def page():
    return make_page
