from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from markupsafe import Markup

from htmx_tutorial import endpoints
from htmx_tutorial.addressing import EndpointResolver

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"


class FragmentKind(str, Enum):
    CLICK_TO_CHANGE = "click_to_change"
    CLICK_TO_LOAD = "click_to_load"
    POLLING = "polling"
    ECHO = "echo"
    FORM_SUBMIT = "form_submit"
    CLICK_TO_EDIT = "click_to_edit"


class Variant(str, Enum):
    ACTIVE = "active"
    RESET = "reset"
    DISPLAY = "display"
    EDIT = "edit"


class UnknownFragmentError(LookupError):
    pass


class TemplateResolutionError(RuntimeError):
    pass


@dataclass(frozen=True)
class FragmentSpec:
    template: str
    # placeholder name -> logical path
    addresses: Mapping[str, str] = field(default_factory=dict)


FRAGMENT_CATALOG: Mapping[tuple[FragmentKind, Variant], FragmentSpec] = {
    (FragmentKind.CLICK_TO_CHANGE, Variant.ACTIVE): FragmentSpec(
        "fragments/click_to_change_active.html",
        {"action_url": endpoints.CLICK_TO_CHANGE},
    ),
    (FragmentKind.CLICK_TO_CHANGE, Variant.RESET): FragmentSpec(
        "fragments/click_to_change_reset.html",
        {"action_url": endpoints.CLICK_TO_CHANGE},
    ),
    (FragmentKind.CLICK_TO_LOAD, Variant.ACTIVE): FragmentSpec(
        "fragments/click_to_load_active.html"
    ),
    (FragmentKind.CLICK_TO_LOAD, Variant.RESET): FragmentSpec("fragments/empty.html"),
    (FragmentKind.POLLING, Variant.ACTIVE): FragmentSpec("fragments/polling_active.html"),
    (FragmentKind.POLLING, Variant.RESET): FragmentSpec("fragments/polling_reset.html"),
    (FragmentKind.ECHO, Variant.ACTIVE): FragmentSpec("fragments/echo_active.html"),
    (FragmentKind.ECHO, Variant.RESET): FragmentSpec("fragments/empty.html"),
    (FragmentKind.FORM_SUBMIT, Variant.ACTIVE): FragmentSpec("fragments/form_submit_active.html"),
    (FragmentKind.FORM_SUBMIT, Variant.RESET): FragmentSpec(
        "fragments/form_submit_reset.html",
        {"submit_url": endpoints.FORM_SUBMIT},
    ),
    (FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY): FragmentSpec(
        "fragments/contact_display.html",
        {"action_url": endpoints.CONTACT},
    ),
    (FragmentKind.CLICK_TO_EDIT, Variant.EDIT): FragmentSpec(
        "fragments/contact_edit.html",
        {"action_url": endpoints.CONTACT, "cancel_url": endpoints.CONTACT_VIEW},
    ),
}


def build_template_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    # StrictUndefined: a placeholder without a value is an error, never blank output.
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        undefined=StrictUndefined,
    )


class FragmentRenderer:
    """Renders one (kind, variant) fragment with a record and resolved addresses.

    Record values are escaped by the environment's autoescaping; addresses come
    from the resolver and are inserted as-is.
    """

    def __init__(
        self,
        resolver: EndpointResolver,
        *,
        env: Environment | None = None,
        catalog: Mapping[tuple[FragmentKind, Variant], FragmentSpec] = FRAGMENT_CATALOG,
    ) -> None:
        self.resolver = resolver
        self.env = env if env is not None else build_template_environment()
        self._catalog = catalog

    def validate(self) -> None:
        """Load every catalogued template; raise TemplateResolutionError on the first failure."""
        for (kind, variant), spec in self._catalog.items():
            try:
                self.env.get_template(spec.template)
            except TemplateError as exc:
                raise TemplateResolutionError(
                    f"Template {spec.template!r} for {kind.value}/{variant.value} "
                    f"could not be loaded: {exc}"
                ) from exc
        logger.info(
            "Loaded %d fragment templates (%s addressing)",
            len(self._catalog),
            self.resolver.mode.value,
        )

    def addresses_for(self, kind: FragmentKind, variant: Variant) -> dict[str, Markup]:
        spec = self._spec(kind, variant)
        return {name: Markup(self.resolver.resolve(path)) for name, path in spec.addresses.items()}

    def render(
        self,
        kind: FragmentKind,
        variant: Variant,
        record: Mapping[str, str] | None = None,
    ) -> str:
        spec = self._spec(kind, variant)
        context: dict[str, object] = dict(record or {})
        context.update(self.addresses_for(kind, variant))
        return self.env.get_template(spec.template).render(context)

    def _spec(self, kind: FragmentKind, variant: Variant) -> FragmentSpec:
        try:
            return self._catalog[(kind, variant)]
        except KeyError:
            raise UnknownFragmentError(
                f"No {variant.value!r} variant for fragment {kind.value!r}"
            ) from None
