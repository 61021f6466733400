"""Shared pytest fixtures for search pipeline tests."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from felice.config import BingSettings, FeliceSettings, FilterSettings


@pytest.fixture
def bing_settings() -> BingSettings:
    return BingSettings(
        api_key=SecretStr("test-key"),
        web_search_url="https://bing.test/v7.0/search",
        image_search_url="https://bing.test/v7.0/images/search",
    )


@pytest.fixture
def settings(bing_settings: BingSettings) -> FeliceSettings:
    return FeliceSettings(
        bing=bing_settings,
        filters=FilterSettings(),
        _env_file=None,
    )
