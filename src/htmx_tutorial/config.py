from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, Field

from htmx_tutorial.addressing import DEFAULT_PUBLIC_BASE_URL, AddressingMode, EndpointResolver

CONFIG_PATH_ENV = "HTMX_TUTORIAL_CONFIG"
BIND_ENV = "HTMX_TUTORIAL_BIND"
PORT_ENV = "PORT"
APP_ENV = "APP_ENV"


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class AddressingConfig(BaseModel):
    mode: AddressingMode = Field(default=AddressingMode.LOCAL)
    public_base_url: str = Field(
        default=DEFAULT_PUBLIC_BASE_URL,
        description="Origin prefixed to every embedded endpoint in public mode.",
    )

    def build_resolver(self) -> EndpointResolver:
        return EndpointResolver(mode=self.mode, base_url=self.public_base_url)


class DemoConfig(BaseModel):
    submit_delay_seconds: float = Field(
        default=1.0, ge=0, description="Artificial latency of the form submission exercise."
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    file: str | None = Field(
        default=None, description="Optional log file; rotated when it reaches max_size_mb."
    )
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class CorsConfig(BaseModel):
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    addressing: AddressingConfig = Field(default_factory=AddressingConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_app_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Build the process configuration.

    - Optional JSON file named by HTMX_TUTORIAL_CONFIG (missing file -> defaults).
    - APP_ENV=production switches endpoint addressing to public mode.
    - PORT and HTMX_TUTORIAL_BIND override the listener settings.

    Validation is performed by Pydantic.
    """

    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {}
    config_path = (env.get(CONFIG_PATH_ENV) or "").strip()
    if config_path:
        path = Path(config_path).expanduser()
        if path.exists():
            raw = _read_json(path)

    config = AppConfig.model_validate(raw)

    if (env.get(APP_ENV) or "").strip().lower() == "production":
        addressing = config.addressing.model_copy(update={"mode": AddressingMode.PUBLIC})
        config = config.model_copy(update={"addressing": addressing})

    network_update: dict[str, Any] = {}
    env_port = (env.get(PORT_ENV) or "").strip()
    if env_port:
        network_update["port"] = env_port
    env_bind = (env.get(BIND_ENV) or "").strip()
    if env_bind:
        network_update["bind_host"] = env_bind
    if network_update:
        # Re-validate so a malformed PORT fails the same way a bad config file does.
        network = NetworkConfig.model_validate(
            {**config.network.model_dump(), **network_update}
        )
        config = config.model_copy(update={"network": network})

    return config
