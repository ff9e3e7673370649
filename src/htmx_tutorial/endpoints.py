"""Logical paths of every fragment endpoint.

Routes are registered on these paths and fragments embed them (through the
addressing resolver) as their htmx targets.
"""

from __future__ import annotations

from typing import Final

CLICK_TO_CHANGE: Final[str] = "/exercise1"
CLICK_TO_CHANGE_RESET: Final[str] = "/exercise1/reset"

CLICK_TO_LOAD: Final[str] = "/exercise2"
CLICK_TO_LOAD_RESET: Final[str] = "/exercise2/reset"

POLLING: Final[str] = "/exercise3"
POLLING_RESET: Final[str] = "/exercise3/reset"

ECHO: Final[str] = "/exercise4"
ECHO_RESET: Final[str] = "/exercise4/reset"

FORM_SUBMIT: Final[str] = "/exercise5/submit"
FORM_SUBMIT_RESET: Final[str] = "/exercise5/reset"

CONTACT: Final[str] = "/exercise6/contact/1"
CONTACT_VIEW: Final[str] = "/exercise6/contact/1/view"
CONTACT_RESET: Final[str] = "/exercise6/reset"
