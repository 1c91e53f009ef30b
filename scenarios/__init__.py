from pathlib import Path

PAGES_DIR = Path(__file__).parent / "pages"


def page_url(name: str) -> str:
    """file:// URL of a bundled demo page, e.g. page_url("wait.html")."""
    path = PAGES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"No demo page named {name!r} in {PAGES_DIR}")
    return path.resolve().as_uri()
