from __future__ import annotations

import re

import pytest
from jinja2 import UndefinedError

from htmx_tutorial.addressing import AddressingMode, EndpointResolver
from htmx_tutorial.contacts import DEFAULT_CONTACT
from htmx_tutorial.fragments import (
    FRAGMENT_CATALOG,
    FragmentKind,
    FragmentRenderer,
    FragmentSpec,
    TemplateResolutionError,
    UnknownFragmentError,
    Variant,
)

PUBLIC_BASE = "https://demo.example"

RECORDS: dict[tuple[FragmentKind, Variant], dict[str, str]] = {
    (FragmentKind.POLLING, Variant.ACTIVE): {"server_time": "01:02:03 PM"},
    (FragmentKind.ECHO, Variant.ACTIVE): {"user_input": "hi"},
    (FragmentKind.FORM_SUBMIT, Variant.ACTIVE): {"name": "Ada"},
    (FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY): DEFAULT_CONTACT.as_record(),
    (FragmentKind.CLICK_TO_EDIT, Variant.EDIT): DEFAULT_CONTACT.as_record(),
}


def _renderer(mode: AddressingMode = AddressingMode.LOCAL) -> FragmentRenderer:
    return FragmentRenderer(EndpointResolver(mode=mode, base_url=PUBLIC_BASE))


def test_validate_loads_every_catalogued_template() -> None:
    _renderer().validate()


def test_validate_fails_fast_on_missing_template() -> None:
    renderer = FragmentRenderer(
        EndpointResolver(),
        catalog={
            (FragmentKind.ECHO, Variant.ACTIVE): FragmentSpec("fragments/does_not_exist.html")
        },
    )
    with pytest.raises(TemplateResolutionError, match="does_not_exist"):
        renderer.validate()


def test_unknown_variant_pair_is_rejected() -> None:
    with pytest.raises(UnknownFragmentError):
        _renderer().render(FragmentKind.ECHO, Variant.EDIT)


def test_missing_record_field_raises_instead_of_rendering_blank() -> None:
    with pytest.raises(UndefinedError):
        _renderer().render(FragmentKind.CLICK_TO_EDIT, Variant.DISPLAY, {"name": "Only"})


@pytest.mark.parametrize("key", sorted(FRAGMENT_CATALOG, key=lambda k: (k[0].value, k[1].value)))
def test_public_mode_embeds_only_absolute_addresses(key: tuple[FragmentKind, Variant]) -> None:
    kind, variant = key
    html = _renderer(AddressingMode.PUBLIC).render(kind, variant, RECORDS.get(key))

    targets = re.findall(r'hx-(?:get|post|put)="([^"]*)"', html)
    assert len(targets) == len(FRAGMENT_CATALOG[key].addresses)
    assert all(t.startswith(PUBLIC_BASE + "/exercise") for t in targets)
    assert "{{" not in html


def test_local_mode_embeds_relative_addresses() -> None:
    html = _renderer().render(FragmentKind.CLICK_TO_EDIT, Variant.EDIT, DEFAULT_CONTACT.as_record())
    assert 'hx-put="/exercise6/contact/1"' in html
    assert 'hx-get="/exercise6/contact/1/view"' in html
    assert 'value="Jane Doe"' in html
    assert 'value="jane.doe@example.com"' in html


def test_click_to_change_variants() -> None:
    renderer = _renderer()
    active = renderer.render(FragmentKind.CLICK_TO_CHANGE, Variant.ACTIVE)
    reset = renderer.render(FragmentKind.CLICK_TO_CHANGE, Variant.RESET)

    assert "btn-success" in active and "Clicked! ✅" in active
    assert "btn-primary" in reset and "Click Me" in reset
    assert 'hx-post="/exercise1"' in active
    assert 'hx-post="/exercise1"' in reset


def test_empty_reset_fragments_render_empty_string() -> None:
    renderer = _renderer()
    assert renderer.render(FragmentKind.CLICK_TO_LOAD, Variant.RESET) == ""
    assert renderer.render(FragmentKind.ECHO, Variant.RESET) == ""


def test_echo_escapes_markup() -> None:
    html = _renderer().render(
        FragmentKind.ECHO, Variant.ACTIVE, {"user_input": "<script>alert(1)</script>"}
    )
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert html.startswith("You typed: <strong>")


def test_contact_fields_are_escaped_in_attributes() -> None:
    html = _renderer().render(
        FragmentKind.CLICK_TO_EDIT,
        Variant.EDIT,
        {"name": '"><img src=x onerror=alert(1)>', "email": "a&b@example.com"},
    )
    assert "<img" not in html
    assert 'value="&#34;&gt;&lt;img src=x onerror=alert(1)&gt;"' in html
    assert 'value="a&amp;b@example.com"' in html


def test_form_submit_reset_uses_resolved_submit_url() -> None:
    html = _renderer(AddressingMode.PUBLIC).render(FragmentKind.FORM_SUBMIT, Variant.RESET)
    assert f'hx-post="{PUBLIC_BASE}/exercise5/submit"' in html
    assert 'id="ex5-response"' in html
