"""Test configuration: isolated environment and offline API client fixtures."""
from __future__ import annotations

import io

import pytest
from rich.console import Console

from wallet_deployer.client import ThirdwebClient
from wallet_deployer.config import ThirdwebConfig

from .fakes import FakeSession

ENV_VARS = (
    "THIRDWEB_API_KEY",
    "THIRDWEB_BASE_URL",
    "DEFAULT_CHAIN_ID",
    "THIRDWEB_ECOSYSTEM_ID",
    "THIRDWEB_ECOSYSTEM_PARTNER_ID",
    "THIRDWEB_TIMEOUT",
    "WATCH_INTERVAL",
    "WATCH_MAX_ATTEMPTS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep log files and stray environment settings out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config() -> ThirdwebConfig:
    return ThirdwebConfig(api_key="sk-test", base_url="https://api.example.test", chain_id=137)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(config: ThirdwebConfig, session: FakeSession) -> ThirdwebClient:
    return ThirdwebClient(config, session=session)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)
