from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from fastapi import APIRouter, Form, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from htmx_tutorial import endpoints
from htmx_tutorial.config import AppConfig
from htmx_tutorial.contacts import ContactStore
from htmx_tutorial.fragments import FragmentKind, FragmentRenderer, Variant

logger = logging.getLogger(__name__)

SERVER_TIME_FORMAT = "%I:%M:%S %p"

router = APIRouter(tags=["exercises"])


def _get_renderer(request: Request) -> FragmentRenderer:
    renderer = getattr(request.app.state, "fragment_renderer", None)
    if renderer is None:
        raise HTTPException(status_code=500, detail="Fragment renderer not initialized")
    return renderer


def _get_contact_store(request: Request) -> ContactStore:
    store = getattr(request.app.state, "contact_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Contact store not initialized")
    return store


def _get_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "app_config", None)
    if config is None:
        raise HTTPException(status_code=500, detail="Config not initialized")
    return config


def _fragment(
    request: Request,
    kind: FragmentKind,
    variant: Variant,
    record: dict[str, str] | None = None,
) -> HTMLResponse:
    return HTMLResponse(content=_get_renderer(request).render(kind, variant, record))


# Exercise 1: click to change text


@router.api_route(endpoints.CLICK_TO_CHANGE, methods=["GET", "POST"], response_class=HTMLResponse)
async def click_to_change(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.CLICK_TO_CHANGE, Variant.ACTIVE)


@router.get(endpoints.CLICK_TO_CHANGE_RESET, response_class=HTMLResponse)
async def click_to_change_reset(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.CLICK_TO_CHANGE, Variant.RESET)


# Exercise 2: click to load


@router.get(endpoints.CLICK_TO_LOAD, response_class=HTMLResponse)
async def click_to_load(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.CLICK_TO_LOAD, Variant.ACTIVE)


@router.get(endpoints.CLICK_TO_LOAD_RESET, response_class=HTMLResponse)
async def click_to_load_reset(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.CLICK_TO_LOAD, Variant.RESET)


# Exercise 3: polling


@router.get(endpoints.POLLING, response_class=HTMLResponse)
async def polling(request: Request) -> HTMLResponse:
    server_time = datetime.now().strftime(SERVER_TIME_FORMAT)
    return _fragment(request, FragmentKind.POLLING, Variant.ACTIVE, {"server_time": server_time})


@router.get(endpoints.POLLING_RESET, response_class=HTMLResponse)
async def polling_reset(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.POLLING, Variant.RESET)


# Exercise 4: echo user input


@router.get(endpoints.ECHO, response_class=HTMLResponse)
async def echo(
    request: Request, user_input: str = Query(default="", alias="user-input")
) -> HTMLResponse:
    return _fragment(request, FragmentKind.ECHO, Variant.ACTIVE, {"user_input": user_input})


@router.get(endpoints.ECHO_RESET, response_class=HTMLResponse)
async def echo_reset(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.ECHO, Variant.RESET)


# Exercise 5: form submission with a slow backend


@router.post(endpoints.FORM_SUBMIT, response_class=HTMLResponse)
async def form_submit(request: Request, name: str = Form(default="")) -> HTMLResponse:
    delay = _get_config(request).demo.submit_delay_seconds
    # Suspends only this request; nothing shared is held while waiting.
    await asyncio.sleep(delay)
    logger.info("Received form submission: %s", name)
    return _fragment(request, FragmentKind.FORM_SUBMIT, Variant.ACTIVE, {"name": name})


@router.get(endpoints.FORM_SUBMIT_RESET, response_class=HTMLResponse)
async def form_submit_reset(request: Request) -> HTMLResponse:
    return _fragment(request, FragmentKind.FORM_SUBMIT, Variant.RESET)


# Exercise 6: click to edit


@router.get(endpoints.CONTACT, response_class=HTMLResponse)
async def contact_edit(request: Request) -> HTMLResponse:
    contact = _get_contact_store(request).snapshot()
    return _fragment(request, FragmentKind.CLICK_TO_EDIT, Variant.EDIT, contact.as_record())


@router.put(endpoints.CONTACT, response_class=HTMLResponse)
async def contact_update(
    request: Request,
    name: str = Form(default=""),
    email: str = Form(default=""),
) -> HTMLResponse:
    written = _get_contact_store(request).update(name=name, email=email)
    return _fragment(request, FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY, written.as_record())


@router.get(endpoints.CONTACT_VIEW, response_class=HTMLResponse)
async def contact_view(request: Request) -> HTMLResponse:
    contact = _get_contact_store(request).snapshot()
    return _fragment(request, FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY, contact.as_record())


@router.get(endpoints.CONTACT_RESET, response_class=HTMLResponse)
async def contact_reset(request: Request) -> HTMLResponse:
    contact = _get_contact_store(request).reset()
    return _fragment(request, FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY, contact.as_record())
