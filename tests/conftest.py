"""Test configuration and shared fixtures."""
from typing import Any

import pytest
import respx

from incapsula_manager.adapters.outbound import HttpxIncapsulaClient, PolicyClient, SiteClient
from incapsula_manager.config import IncapsulaConfig

BASE_URL = "https://my.incapsula.test/api/prov/v1"
BASE_URL_API = "https://api.incapsula.test"


class RecordingLogger:
    """LoggerPort implementation that keeps every entry for assertions."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict]] = []

    def debug(self, message: str, **kwargs: Any) -> None:
        self.records.append(("DEBUG", message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self.records.append(("INFO", message, kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self.records.append(("WARNING", message, kwargs))

    def error(self, message: str, exception: Exception | None = None, **kwargs: Any) -> None:
        self.records.append(("ERROR", message, kwargs))

    def set_level(self, level: str) -> None:
        pass

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


@pytest.fixture
def logger() -> RecordingLogger:
    """Logger that records entries."""
    return RecordingLogger()


@pytest.fixture
def config() -> IncapsulaConfig:
    """Config pointing at test base URLs."""
    return IncapsulaConfig(
        api_id="12345",
        api_key="secret-key",
        base_url=BASE_URL,
        base_url_api=BASE_URL_API,
    )


@pytest.fixture
def api_mock():
    """respx router intercepting all httpx traffic."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def http_client(api_mock, config, logger):
    """Authenticated HTTP transport routed through respx."""
    with HttpxIncapsulaClient(config=config, logger=logger) as client:
        yield client


@pytest.fixture
def site_client(http_client, logger) -> SiteClient:
    return SiteClient(http=http_client, logger=logger)


@pytest.fixture
def policy_client(http_client, logger) -> PolicyClient:
    return PolicyClient(http=http_client, logger=logger)
