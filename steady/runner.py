from __future__ import annotations

import importlib
import logging
import time
import traceback
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from steady.browser import BrowserProfile, open_page

# Two commands (run, version), so `run` stays an explicit subcommand.
app = typer.Typer(add_completion=False, no_args_is_help=True)

console = Console()


@dataclass
class RunResult:
    """One scenario run; `error` holds the traceback when it failed."""
    idx: int  # 1..N
    ok: bool
    duration_ms: int
    error: Optional[str] = None


def load_callable(target: str) -> Callable:
    """Import "package.module:function", e.g. "scenarios.robust:run"."""
    if ":" not in target:
        raise ValueError('Target must be in the form "module:function" (e.g. scenarios.robust:run)')

    module_name, func_name = target.split(":", 1)
    module = importlib.import_module(module_name)
    fn = getattr(module, func_name, None)

    if fn is None or not callable(fn):
        raise ValueError(f'Function "{func_name}" not found or not callable in module "{module_name}"')

    return fn


def run_once(scenario_fn: Callable, profile: BrowserProfile, base_url: Optional[str]) -> Tuple[bool, int, Optional[str]]:
    start = time.perf_counter()

    try:
        with open_page(profile, accept_downloads=True) as page:
            if base_url:
                page.goto(base_url)
            scenario_fn(page)

        dur_ms = int((time.perf_counter() - start) * 1000)
        return True, dur_ms, None

    except Exception:
        dur_ms = int((time.perf_counter() - start) * 1000)
        err = traceback.format_exc(limit=20)
        return False, dur_ms, err


def verdict(results: list[RunResult]) -> str:
    """All passed -> stable, all failed -> broken, anything in between -> flaky."""
    passed = sum(1 for r in results if r.ok)
    if passed == len(results):
        return "stable"
    if passed == 0:
        return "broken"
    return "flaky"


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command("run")
def run_cmd(
    target: str = typer.Argument(
        ...,
        help='Scenario entrypoint in the format "module:function" (e.g. scenarios.robust:run)',
    ),
    runs: int = typer.Option(
        5,
        "--runs",
        min=1,
        max=500,
        envvar="STEADY_RUNS",
        help="How many executions to perform",
    ),
    headless: bool = typer.Option(
        True,
        "--headless/--headed",
        envvar="STEADY_HEADLESS",
        help="Run headless (default) or show the browser",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        envvar="STEADY_BASE_URL",
        help="Optional URL to open before calling the scenario",
    ),
    width: int = typer.Option(1366, "--width", min=1, help="Browser window width"),
    height: int = typer.Option(768, "--height", min=1, help="Browser window height"),
    scale: float = typer.Option(1.0, "--scale", min=0.1, help="Forced device scale factor"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every poll attempt"),
):
    """
    Run a Playwright sync scenario multiple times and report whether it is stable, flaky or broken.
    """
    _setup_logging(verbose)
    scenario_fn = load_callable(target)
    profile = BrowserProfile(width=width, height=height, device_scale_factor=scale, headless=headless)

    results: list[RunResult] = []

    for i in range(1, runs + 1):
        ok, dur_ms, err = run_once(scenario_fn, profile=profile, base_url=base_url)
        results.append(RunResult(idx=i, ok=ok, duration_ms=dur_ms, error=err))

        status = "[green]OK[/green]" if ok else "[red]FAIL[/red]"
        console.print(f"Run {i}/{runs}: {status} ({dur_ms} ms)")

    total = len(results)
    failures = [r for r in results if not r.ok]
    passed = total - len(failures)
    avg = int(sum(r.duration_ms for r in results) / total)
    outcome = verdict(results)

    table = Table(title="Steady - Report")
    table.add_column("Metric", style="bold")
    table.add_column("Value")

    table.add_row("Target", target)
    table.add_row("Runs", str(total))
    table.add_row("Passed", str(passed))
    table.add_row("Failed", str(len(failures)))
    table.add_row("Avg duration", f"{avg} ms")
    table.add_row("Window", f"{width}x{height} @{scale:g}x")
    table.add_row("Headless", "Yes" if headless else "No")
    table.add_row("Verdict", outcome)

    console.print()
    console.print(table)

    if failures:
        console.print("\n[bold red]Failures (first 1 shown):[/bold red]\n")
        first = failures[0]
        console.print(f"[red]Run #{first.idx} failed[/red] after {first.duration_ms} ms\n")
        console.print(first.error, markup=False, highlight=False)
        raise typer.Exit(code=1)


@app.command("version")
def version_cmd():
    """Print the installed version."""
    from steady import __version__
    console.print(__version__)


# python -m steady.runner run scenarios.robust:run
if __name__ == "__main__":
    app()
