from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from htmx_tutorial.app import create_app
from htmx_tutorial.config import AppConfig, DemoConfig


@pytest.fixture
def fast_config() -> AppConfig:
    return AppConfig(demo=DemoConfig(submit_delay_seconds=0))


@pytest.fixture
def client(fast_config: AppConfig):
    with TestClient(create_app(fast_config)) as c:
        yield c
