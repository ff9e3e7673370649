from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

DEFAULT_PUBLIC_BASE_URL: Final[str] = "https://simple-htmx-go-tutorial-production.up.railway.app"


class AddressingMode(str, Enum):
    LOCAL = "local"
    PUBLIC = "public"


@dataclass(frozen=True)
class EndpointResolver:
    """Turns logical paths into the URLs fragments embed as their own targets.

    LOCAL keeps paths relative so the page works from whatever host served it.
    PUBLIC prefixes the fixed public origin, for pages copied out and loaded
    from elsewhere.
    """

    mode: AddressingMode = AddressingMode.LOCAL
    base_url: str = DEFAULT_PUBLIC_BASE_URL

    def resolve(self, path: str) -> str:
        if self.mode is AddressingMode.PUBLIC:
            return self.base_url.rstrip("/") + path
        return path

    def public(self) -> EndpointResolver:
        return EndpointResolver(mode=AddressingMode.PUBLIC, base_url=self.base_url)
