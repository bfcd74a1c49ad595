"""Command-line interface for DealerCosts."""

from __future__ import annotations

import json
from datetime import datetime
from functools import cached_property
from pathlib import Path

import click

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelCostCategoryRepository, SQLModelCostRepository
from .logging_config import setup_logging
from .models.cost import CostFrequency, CostStatus, CostType
from .services.costs import CostValidationError, save_cost
from .services.export_csv import (
    default_report_filename,
    export_report_csv,
    format_currency,
)
from .services.projections import excluded_records, project

_DATE = click.DateTime(formats=["%Y-%m-%d"])


class _Context:
    """Lazily bootstrapped config + repositories shared by commands.

    Nothing touches the data directory until a command first asks for it, so
    ``--help`` and usage errors leave the filesystem alone.
    """

    def __init__(self, dealer_id: str | None):
        self._dealer_id = dealer_id

    @cached_property
    def config(self) -> BaseConfig:
        config = BaseConfig()
        setup_logging(config)
        return config

    @property
    def dealer_id(self) -> str:
        return self._dealer_id or self.config.DEALER_ID

    @cached_property
    def session_factory(self):
        _, session_factory = bootstrap_database(self.config)
        return session_factory

    @cached_property
    def costs(self) -> SQLModelCostRepository:
        return SQLModelCostRepository(self.session_factory)

    @cached_property
    def categories(self) -> SQLModelCostCategoryRepository:
        return SQLModelCostCategoryRepository(self.session_factory)


@click.group()
@click.option("--dealer", "dealer_id", default=None, help="Dealer id (default: DEALERCOSTS_DEALER_ID)")
@click.pass_context
def cli(ctx: click.Context, dealer_id: str | None) -> None:
    """Dealership cost tracking and projections."""

    ctx.obj = _Context(dealer_id)


@cli.command("project")
@click.option("--date", "on_date", type=_DATE, default=None, help="Reference day (default: today)")
@click.option(
    "--status",
    "statuses",
    multiple=True,
    type=click.Choice([s.value for s in CostStatus]),
    help="Only include records with this status (repeatable)",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result as JSON")
@click.pass_obj
def project_command(obj: _Context, on_date: datetime | None, statuses: tuple[str, ...], as_json: bool) -> None:
    """Print the quarterly and yearly cost projections."""

    records = obj.costs.list_all(dealer_id=obj.dealer_id)
    result = project(records, on_date, statuses=statuses or None)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.echo(f"Projections from {result.reference.date().isoformat()}")
    click.echo(f"  Quarterly (Next 3 months): {format_currency(result.quarterly)}")
    click.echo(f"  Annual (Next 12 months):   {format_currency(result.yearly)}")
    for label, totals in (("Quarter", result.breakdown.quarterly), ("Year", result.breakdown.yearly)):
        click.echo(
            f"  {label}: weekly {format_currency(totals.weekly)}, "
            f"monthly {format_currency(totals.monthly)}, annual {format_currency(totals.annual)}"
        )
    skipped = excluded_records(records)
    if skipped:
        click.echo(f"  {len(skipped)} quarterly-billed or one-off cost(s) not included")


@cli.command("export")
@click.argument("output", type=click.Path(dir_okay=True, path_type=Path), required=False)
@click.option("--detailed", is_flag=True, default=False, help="Include the detailed breakdown")
@click.option("--date", "on_date", type=_DATE, default=None, help="Reference day (default: today)")
@click.pass_obj
def export_command(obj: _Context, output: Path | None, detailed: bool, on_date: datetime | None) -> None:
    """Write the cost report CSV to OUTPUT (file or directory)."""

    records = obj.costs.list_all(dealer_id=obj.dealer_id)
    result = project(records, on_date)
    filename = default_report_filename(prefix=obj.config.EXPORT_PREFIX)
    if output is None:
        output = obj.config.DATA_DIR / "exports" / filename
    elif output.is_dir():
        output = output / filename
    path = export_report_csv(result=result, records=records, output_path=output, detailed=detailed)
    click.echo(f"Export written: {path}")


@cli.command("seed-categories")
@click.pass_obj
def seed_categories_command(obj: _Context) -> None:
    """Create the default cost categories for the dealer if it has none."""

    categories = obj.categories.ensure_defaults(dealer_id=obj.dealer_id)
    click.echo(f"{len(categories)} categories available for dealer {obj.dealer_id}")


@cli.command("add-cost")
@click.option("--description", required=True)
@click.option("--amount", required=True, help="Base amount before VAT")
@click.option("--category", default="Other", show_default=True)
@click.option(
    "--type",
    "cost_type",
    type=click.Choice([t.value for t in CostType]),
    default=CostType.RECURRING.value,
    show_default=True,
)
@click.option("--frequency", type=click.Choice([f.value for f in CostFrequency]), default=None)
@click.option("--vat/--no-vat", "has_vat", default=False, show_default=True)
@click.option("--start", "start_date", type=_DATE, default=None)
@click.option("--end", "end_date", type=_DATE, default=None)
@click.option("--due", "due_date", type=_DATE, default=None)
@click.option("--notes", default=None)
@click.pass_obj
def add_cost_command(obj: _Context, **fields) -> None:
    """Record a new cost."""

    try:
        cost = save_cost(obj.costs, dealer_id=obj.dealer_id, **fields)
    except CostValidationError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(f"Created cost {cost.id}: {cost.description} {format_currency(cost.total_amount)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
