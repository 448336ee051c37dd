"""Form import CLI: ``formflow-import``.

Loads YAML form definitions and upserts them into the database, replacing
the steps of forms that already exist.  Stored submissions are untouched.

Examples::

    # Import every form under forms/ (repo root)
    uv run formflow-import

    # Import specific files
    uv run formflow-import forms/customer_feedback.yaml

    # Validate only, without touching the database
    uv run formflow-import --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from formflow_wizard.loader import FormLoader
from formflow_wizard.models.form import FormDefinition

logger = logging.getLogger(__name__)


def load_definitions(
    paths: list[str] | None = None, forms_dir: str | None = None
) -> list[FormDefinition]:
    """Parse the given files, or every file in ``forms_dir`` when none are given."""
    loader = FormLoader(forms_dir)
    if paths:
        return [loader.load(Path(p)) for p in paths]
    return list(loader.load_all().values())


async def run_import(definitions: list[FormDefinition]) -> int:
    """Upsert ``definitions`` in one transaction and return how many were written."""
    # Lazy imports keep --dry-run free of database machinery
    from formflow_db.engine import dispose_engine, get_session_factory
    from formflow_wizard.dashboard import FormDashboard

    dashboard = FormDashboard()
    factory = get_session_factory()
    try:
        async with factory() as db:
            for definition in definitions:
                await dashboard.import_definition(db, definition)
            await db.commit()
        logger.info("Import complete: %d forms", len(definitions))
        return len(definitions)
    finally:
        await dispose_engine()


def cli() -> None:
    """Console-script entry point: ``formflow-import``."""
    parser = argparse.ArgumentParser(
        prog="formflow-import",
        description="Load YAML form definitions into the FormFlow database.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="YAML files to import (default: every file in --forms-dir)",
    )
    parser.add_argument(
        "--forms-dir",
        default=None,
        help="Directory scanned when no paths are given (default: forms/ at repo root)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Parse and validate only",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        definitions = load_definitions(args.paths, args.forms_dir)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        sys.exit(1)

    for definition in definitions:
        print(f"{definition.id}: {definition.form.title} ({definition.step_count} steps)")
    if args.dry_run:
        sys.exit(0)

    imported = asyncio.run(run_import(definitions))
    print(f"Imported forms: {imported}")
    sys.exit(0)
