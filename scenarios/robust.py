from __future__ import annotations

from scenarios import page_url
from steady.conditions import (
    element_clickable,
    element_present,
    element_visible,
    handle_enabled,
)
from steady.polling import eventually, wait_until


def run(page):
    page.goto(page_url("wait.html"))

    # Each wait names its own timeout; nothing is set on the page globally.
    paragraph = wait_until(element_present(page, "#div p"), timeout=10, label="paragraph added")
    assert paragraph.is_visible()

    # Present is not the same as visible.
    button = wait_until(element_visible(page, "#button"), timeout=10, label="button shown")
    assert button.is_visible()

    disabled = page.query_selector("#disabled")
    assert disabled.is_visible()
    wait_until(handle_enabled(disabled), timeout=10, label="input enabled")
    assert disabled.is_enabled()

    field = wait_until(element_clickable(page, "#disabled"), timeout=2, label="input clickable")
    field.fill("steady")

    def typed_value_sticks():
        assert page.input_value("#disabled", timeout=1000) == "steady"

    eventually(typed_value_sticks, timeout_s=3, interval_s=0.1, label="value set")
