import pytest

from steady.browser import BrowserProfile, open_page


@pytest.fixture
def profile():
    return BrowserProfile()


@pytest.fixture
def page(profile):
    with open_page(profile, accept_downloads=True) as p:
        yield p
