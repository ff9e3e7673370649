from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from htmx_tutorial.addressing import DEFAULT_PUBLIC_BASE_URL, AddressingMode
from htmx_tutorial.config import AppConfig, load_app_config


def test_load_app_config_defaults_when_env_empty() -> None:
    cfg = load_app_config({})
    assert isinstance(cfg, AppConfig)
    assert cfg.network.bind_host == "127.0.0.1"
    assert cfg.network.port == 8080
    assert cfg.addressing.mode is AddressingMode.LOCAL
    assert cfg.addressing.public_base_url == DEFAULT_PUBLIC_BASE_URL
    assert cfg.demo.submit_delay_seconds == 1.0


def test_production_env_selects_public_addressing() -> None:
    cfg = load_app_config({"APP_ENV": "production"})
    assert cfg.addressing.mode is AddressingMode.PUBLIC

    resolver = cfg.addressing.build_resolver()
    assert resolver.resolve("/exercise1") == DEFAULT_PUBLIC_BASE_URL + "/exercise1"


def test_other_app_env_stays_local() -> None:
    cfg = load_app_config({"APP_ENV": "staging"})
    assert cfg.addressing.mode is AddressingMode.LOCAL


def test_port_and_bind_overrides() -> None:
    cfg = load_app_config({"PORT": "9090", "HTMX_TUTORIAL_BIND": "0.0.0.0"})
    assert cfg.network.port == 9090
    assert cfg.network.bind_host == "0.0.0.0"


def test_invalid_port_is_rejected() -> None:
    with pytest.raises(ValidationError):
        load_app_config({"PORT": "not-a-port"})


def test_config_file_is_loaded(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "addressing": {"mode": "public", "public_base_url": "https://demo.example"},
                "demo": {"submit_delay_seconds": 0.25},
            }
        ),
        encoding="utf-8",
    )

    cfg = load_app_config({"HTMX_TUTORIAL_CONFIG": str(config_path)})
    assert cfg.addressing.mode is AddressingMode.PUBLIC
    assert cfg.addressing.public_base_url == "https://demo.example"
    assert cfg.demo.submit_delay_seconds == 0.25


def test_missing_config_file_falls_back_to_defaults(tmp_path: Path) -> None:
    cfg = load_app_config({"HTMX_TUTORIAL_CONFIG": str(tmp_path / "nope.json")})
    assert cfg == AppConfig()


def test_config_file_validation_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"demo": {"submit_delay_seconds": -1}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_app_config({"HTMX_TUTORIAL_CONFIG": str(config_path)})
