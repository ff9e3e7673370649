from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from htmx_tutorial import endpoints
from htmx_tutorial.contacts import ContactStore
from htmx_tutorial.exercises import router as exercise_routes
from htmx_tutorial.fragments import FragmentKind, FragmentRenderer, Variant

router = APIRouter(tags=["pages"])


@dataclass(frozen=True)
class Exercise:
    number: int
    title: str
    summary: str
    handlers: tuple[Callable[..., Any], ...]

    @property
    def partial(self) -> str:
        return f"pages/exercises/exercise{self.number}.html"


EXERCISES: dict[int, Exercise] = {
    1: Exercise(
        1,
        "Click to Change Text",
        "Click the button below to see it change!",
        (exercise_routes.click_to_change, exercise_routes.click_to_change_reset),
    ),
    2: Exercise(
        2,
        "Click to Load Content",
        "Click the button to load content from the server into the target div.",
        (exercise_routes.click_to_load, exercise_routes.click_to_load_reset),
    ),
    3: Exercise(
        3,
        "Polling for Updates",
        "This div automatically updates every 2 seconds with the current server time.",
        (exercise_routes.polling, exercise_routes.polling_reset),
    ),
    4: Exercise(
        4,
        "Send User Input",
        "Type in the input field below. The server will echo your input with a 500ms delay "
        "after you stop typing.",
        (exercise_routes.echo, exercise_routes.echo_reset),
    ),
    5: Exercise(
        5,
        "Form Submission & Loading Indicators",
        "Submit the form below. Notice the loading spinner that appears during submission.",
        (exercise_routes.form_submit, exercise_routes.form_submit_reset),
    ),
    6: Exercise(
        6,
        "Click To Edit",
        'Click "Click To Edit" to switch to edit mode. The server controls the UI state.',
        (
            exercise_routes.contact_edit,
            exercise_routes.contact_update,
            exercise_routes.contact_view,
            exercise_routes.contact_reset,
        ),
    ),
}


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


def _get_exercise(number: int) -> Exercise:
    exercise = EXERCISES.get(number)
    if exercise is None:
        raise HTTPException(status_code=404, detail=f"Unknown exercise: {number}")
    return exercise


def _get_templates(request: Request) -> Jinja2Templates:
    templates = getattr(request.app.state, "page_templates", None)
    if templates is None:
        raise HTTPException(status_code=500, detail="Page templates not initialized")
    return templates


def _page_context(renderer: FragmentRenderer, request: Request) -> dict[str, Any]:
    """Resolved endpoint URLs plus the initial fragments each demo starts from."""
    urls = {
        name: Markup(renderer.resolver.resolve(path))
        for name, path in vars(endpoints).items()
        if name.isupper() and isinstance(path, str)
    }
    contact = _get_contact_store(request).snapshot()
    initial = {
        "click_to_change": Markup(renderer.render(FragmentKind.CLICK_TO_CHANGE, Variant.RESET)),
        "form_submit": Markup(renderer.render(FragmentKind.FORM_SUBMIT, Variant.RESET)),
        "contact": Markup(
            renderer.render(FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY, contact.as_record())
        ),
    }
    return {"urls": urls, "initial": initial}


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    renderer = _get_renderer(request)
    ctx = _page_context(renderer, request)
    ctx.update({"title": "HTMX Tutorial", "exercises": list(EXERCISES.values())})
    return _get_templates(request).TemplateResponse(request, "pages/index.html", ctx)


@router.get("/code/exercise{number:int}", response_class=HTMLResponse)
async def exercise_page(request: Request, number: int) -> HTMLResponse:
    """Standalone copy of one exercise, addressed against the public origin."""
    exercise = _get_exercise(number)
    local = _get_renderer(request)
    renderer = FragmentRenderer(local.resolver.public(), env=local.env)
    ctx = _page_context(renderer, request)
    ctx.update({"title": f"Exercise {exercise.number}: {exercise.title}", "exercise": exercise})
    return _get_templates(request).TemplateResponse(request, "pages/exercise.html", ctx)


@router.get("/code/exercise{number:int}/source", response_class=PlainTextResponse)
async def exercise_source(number: int) -> PlainTextResponse:
    exercise = _get_exercise(number)
    header = f"# Exercise {exercise.number}: {exercise.title}\n"
    body = "\n\n".join(inspect.getsource(fn).rstrip() for fn in exercise.handlers)
    return PlainTextResponse(header + body + "\n")
