#!/usr/bin/env python3
"""Client integration test for a running FormFlow server.

Walks every form found in ``forms/`` with the SDK's ``WizardController`` and
a real ``HttpSubmissionTransport``, filling each visible field with a random
valid answer, taking whichever branch the answers lead to, and submitting.
Afterwards the dashboard API is checked: the stats counter must have grown by
the number of accepted submissions and the CSV export must list them.

The forms must already be imported (``formflow-import``).

Usage::

    # Install deps (first time only)
    uv pip install httpx rich

    # Quick smoke test (1 run per form)
    uv run python scripts/run_client_test.py -n 1 -v

    # Only the demo form, 20 runs, reproducible
    uv run python scripts/run_client_test.py -f customer-feedback -n 20 --seed 42
"""

from __future__ import annotations

import argparse
import asyncio
import random
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
from rich.console import Console
from rich.table import Table

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from formflow_wizard.errors import FormflowError  # noqa: E402
from formflow_wizard.loader import FormLoader  # noqa: E402
from formflow_wizard.models.field import BaseFormField  # noqa: E402
from formflow_wizard.models.form import FormDefinition  # noqa: E402
from formflow_wizard.transport import HttpSubmissionTransport  # noqa: E402
from formflow_wizard.wizard import WizardController  # noqa: E402

FREE_TEXT_POOL = [
    "Quick and friendly",
    "Took a while, but fine",
    "Could be better",
    "Great service, thanks!",
    "Staff was helpful, parking was not",
]


# ---------------------------------------------------------------------------
# AnswerGenerator: random but valid answers per field type
# ---------------------------------------------------------------------------

class AnswerGenerator:
    """Produces answers that satisfy each field's validation rules."""

    def __init__(self, rng: random.Random, skip_optional: float = 0.3):
        self._rng = rng
        self._skip_optional = skip_optional

    def answer(self, f: BaseFormField) -> Any | None:
        """Return an answer, or None to leave an optional field empty."""
        if not f.required and self._rng.random() < self._skip_optional:
            return None
        rules = f.validation
        if f.type in ("select", "radio"):
            return self._rng.choice(f.options)
        if f.type == "checkbox":
            most = int(rules.max) if rules and rules.max else len(f.options)
            k = self._rng.randint(1, min(most, len(f.options)))
            return self._rng.sample(f.options, k)
        if f.type == "number":
            lo = int(rules.min) if rules and rules.min is not None else 0
            hi = int(rules.max) if rules and rules.max is not None else lo + 100
            return self._rng.randint(lo, hi)
        if f.type == "email":
            return f"user{self._rng.randint(1, 9999)}@example.com"
        if f.type == "date":
            return f"2026-{self._rng.randint(1, 12):02d}-{self._rng.randint(1, 28):02d}"
        if f.type == "file":
            return f"https://cdn.example.com/uploads/{int(time.time() * 1000)}-demo.png"
        if rules and rules.pattern:
            # Patterned text fields in the shipped forms are phone numbers
            return f"+31 6 {self._rng.randint(10000000, 99999999)}"
        text = self._rng.choice(FREE_TEXT_POOL)
        if rules and rules.max is not None:
            text = text[: int(rules.max)]
        return text


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class RunResult:
    form_id: str
    run_index: int
    path: list[str] = field(default_factory=list)
    submission_id: str | None = None
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.submission_id is not None and self.error is None


class ResultCollector:
    def __init__(self) -> None:
        self.results: list[RunResult] = []

    def add(self, result: RunResult) -> None:
        self.results.append(result)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return len(self.results) - self.passed

    def print_summary(self, console: Console) -> None:
        console.print()
        console.rule("[bold]Run Summary")
        table = Table(show_header=True, header_style="bold")
        table.add_column("Form")
        table.add_column("Runs", justify="right")
        table.add_column("Passed", justify="right", style="green")
        table.add_column("Failed", justify="right", style="red")
        table.add_column("Distinct paths", justify="right")
        by_form: dict[str, list[RunResult]] = {}
        for r in self.results:
            by_form.setdefault(r.form_id, []).append(r)
        for form_id, runs in by_form.items():
            passed = sum(1 for r in runs if r.passed)
            paths = {" > ".join(r.path) for r in runs}
            table.add_row(
                form_id, str(len(runs)), str(passed), str(len(runs) - passed), str(len(paths)),
            )
        console.print(table)
        for r in self.results:
            if not r.passed:
                console.print(f"  [red]✗[/] {r.form_id} run {r.run_index}: {r.error}")


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

async def run_wizard(
    definition: FormDefinition,
    transport: HttpSubmissionTransport,
    answers: AnswerGenerator,
    run_index: int,
    console: Console,
    verbose: int,
) -> RunResult:
    """Fill and submit one wizard session."""
    result = RunResult(form_id=definition.id, run_index=run_index)
    wizard = WizardController(definition, transport)

    while True:
        step = wizard.current_step
        result.path.append(step.id)
        # Fields are filled in order so later conditions see earlier answers
        for f in step.fields:
            if not wizard.is_visible(f.id):
                continue
            value = answers.answer(f)
            if value is None:
                continue
            wizard.set_answer(f.id, value)
            if verbose > 1:
                console.print(f"    [dim]{f.id}:[/] {value!r}")
        if not wizard.can_go_next:
            break
        wizard.next()

    try:
        submitted = await wizard.submit()
    except FormflowError as exc:
        result.error = f"{type(exc).__name__}: {exc.message}"
        return result
    result.submission_id = submitted.submission_id if submitted else None
    if verbose:
        console.print(
            f"  [green]✓[/] {definition.id} run {run_index}: "
            f"{' > '.join(result.path)} → {result.submission_id}"
        )
    return result


async def fetch_total(client: httpx.AsyncClient, form_id: str) -> int:
    resp = await client.get(f"/api/forms/{form_id}/stats")
    resp.raise_for_status()
    return resp.json()["total_submissions"]


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="FormFlow API client integration test")
    parser.add_argument("--base-url", default="http://localhost:8080", help="Server base URL")
    parser.add_argument("-f", "--form", action="append", help="Only this form id (repeatable)")
    parser.add_argument("-n", "--runs", type=int, default=3, help="Runs per form (default: 3)")
    parser.add_argument("--forms-dir", default=str(REPO_ROOT / "forms"))
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible runs")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    console = Console()

    seed = args.seed if args.seed is not None else int(time.time())
    rng = random.Random(seed)
    console.print(f"[dim]RNG seed: {seed}[/]")

    loader = FormLoader(args.forms_dir)
    forms = loader.load_all()
    if args.form:
        unknown = [f for f in args.form if f not in forms]
        if unknown:
            console.print(f"[red]Unknown form(s):[/] {', '.join(unknown)}")
            console.print(f"Available: {', '.join(forms)}")
            sys.exit(1)
        forms = {f: forms[f] for f in args.form}

    answers = AnswerGenerator(rng)
    collector = ResultCollector()

    async with httpx.AsyncClient(base_url=args.base_url, timeout=args.timeout) as client:
        try:
            health = (await client.get("/health")).json()
        except httpx.HTTPError:
            health = {"status": "unreachable"}
        if health.get("status") != "ok":
            console.print(
                f"[red]Server at {args.base_url} is not healthy ({health.get('status')}). "
                f"Is the server running?[/]"
            )
            sys.exit(1)
        console.print(f"[green]Server health check passed[/] ({args.base_url})")

        transport = HttpSubmissionTransport(args.base_url, timeout=args.timeout, client=client)
        for form_id, definition in forms.items():
            console.rule(f"[bold]{definition.form.title}[/] ({form_id})")
            before = await fetch_total(client, form_id)
            accepted = 0
            for run_index in range(1, args.runs + 1):
                result = await run_wizard(
                    definition, transport, answers, run_index, console, args.verbose,
                )
                collector.add(result)
                accepted += int(result.passed)

            after = await fetch_total(client, form_id)
            if after - before != accepted:
                console.print(
                    f"  [yellow]![/] stats grew by {after - before}, expected {accepted}"
                )
            export = await client.get(f"/api/forms/{form_id}/export.csv")
            exported_ids = export.text
            missing = [
                r.submission_id for r in collector.results
                if r.form_id == form_id and r.passed and r.submission_id not in exported_ids
            ]
            if missing:
                console.print(f"  [yellow]![/] {len(missing)} submissions missing from CSV export")

    collector.print_summary(console)
    if collector.failed > 0:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
