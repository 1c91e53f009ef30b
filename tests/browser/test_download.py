"""
Polling is not only for the browser: anything that can be asked a yes/no
question can be waited for, such as a file showing up after an export.
"""
import pytest

from scenarios import page_url
from steady.conditions import element_visible, file_exists
from steady.polling import wait_until

pytestmark = pytest.mark.browser


def test_wait_for_downloaded_file(page, tmp_path):
    target = tmp_path / "Products.csv"
    page.goto(page_url("download.html"))

    export = wait_until(element_visible(page, "#export"), timeout=20, label="export link")
    with page.expect_download() as download_info:
        export.click()
    download_info.value.save_as(target)

    wait_until(file_exists(target), timeout=10, label="Products.csv saved")
    assert target.read_text().startswith("Name,Price")
