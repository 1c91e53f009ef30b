# scenarios/fragile.py
# Intentionally fragile scenario: global timeout, fixed sleeps, no waiting for state.
# Kept as a negative example; run it a few times with `steady run scenarios.fragile:run`.

import time

from scenarios import page_url


def run(page):
    # The "implicit wait": one session-wide timeout for every lookup.
    page.set_default_timeout(1500)
    page.goto(page_url("wait.html"))

    # What if the paragraph shows up after 4 s? Fail. After 1 s? 2 s wasted.
    time.sleep(2)
    assert page.query_selector("#div p") is not None, "Paragraph missing (expected: it arrives at 3 s)"

    # The button is in the DOM from the start, so a lookup succeeds right away...
    button = page.query_selector("#button")
    # ...but it is not displayed yet.
    assert button.is_visible(), "Button not visible yet"
