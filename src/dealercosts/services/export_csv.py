"""CSV export of the dealership cost report."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from ..models.cost import CostFrequency, CostType
from .aggregation import CostTotal, summarize_totals
from .projections import ProjectionResult
from .proration import coerce_enum, record_total

REPORT_TITLE = "Dealership Cost Management Report"

# (label, matcher) in report order
_SECTIONS: list[tuple[str, Any]] = [
    ("WEEKLY COSTS", lambda r: _recurring_at(r, CostFrequency.WEEKLY)),
    ("MONTHLY COSTS", lambda r: _recurring_at(r, CostFrequency.MONTHLY)),
    ("QUARTERLY COSTS", lambda r: _recurring_at(r, CostFrequency.QUARTERLY)),
    ("ANNUAL COSTS", lambda r: _recurring_at(r, CostFrequency.ANNUAL)),
    ("ONE-TIME COSTS", lambda r: _cost_type(r) is CostType.ONE_TIME),
    ("MISCELLANEOUS COSTS", lambda r: _cost_type(r) is CostType.MISCELLANEOUS),
]

_COST_TYPE_LABELS = {
    CostType.RECURRING.value: "Recurring",
    CostType.ONE_TIME.value: "One-time",
    CostType.MISCELLANEOUS.value: "Miscellaneous",
}


def _frequency(record: Any) -> Optional[CostFrequency]:
    return coerce_enum(CostFrequency, getattr(record, "frequency", None))


def _cost_type(record: Any) -> Optional[CostType]:
    return coerce_enum(CostType, getattr(record, "cost_type", None))


def _recurring_at(record: Any, frequency: CostFrequency) -> bool:
    return _cost_type(record) is CostType.RECURRING and _frequency(record) is frequency


def format_currency(amount: float) -> str:
    """Render an amount as pounds with two decimals, e.g. ``£1234.50``."""

    return f"£{float(amount or 0.0):.2f}"


def _format_date(value: Any) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    return str(value) if value else ""


def _status(record: Any) -> str:
    status = getattr(record, "status", "")
    return str(getattr(status, "value", status) or "")


def _summary_label(total: CostTotal) -> str:
    if total.frequency:
        return str(total.frequency).capitalize()
    return _COST_TYPE_LABELS.get(total.cost_type, "Unknown")


def _write_projection_summary(writer, result: ProjectionResult) -> None:
    writer.writerow(["COST PROJECTIONS SUMMARY"])
    writer.writerow(["Period", "Amount"])
    writer.writerow(["Quarterly (Next 3 months)", format_currency(result.quarterly)])
    writer.writerow(["Annual (Next 12 months)", format_currency(result.yearly)])
    writer.writerow([])


def _write_detailed_breakdown(writer, result: ProjectionResult) -> None:
    quarterly = result.breakdown.quarterly
    yearly = result.breakdown.yearly

    writer.writerow(["DETAILED PROJECTION BREAKDOWN"])
    writer.writerow([])
    writer.writerow(["Quarterly Breakdown"])
    writer.writerow(["Cost Type", "Effective Amount"])
    writer.writerow(["Weekly Costs", format_currency(quarterly.weekly)])
    writer.writerow(["Monthly Costs", format_currency(quarterly.monthly)])
    writer.writerow(["Annual Costs (÷4)", format_currency(quarterly.annual)])
    writer.writerow([])
    writer.writerow(["Annual Breakdown"])
    writer.writerow(["Cost Type", "Effective Amount"])
    writer.writerow(["Weekly Costs", format_currency(yearly.weekly)])
    writer.writerow(["Monthly Costs", format_currency(yearly.monthly)])
    writer.writerow(["Annual Costs", format_currency(yearly.annual)])
    writer.writerow([])

    writer.writerow(["Projection Items"])
    writer.writerow(
        ["Window", "Frequency", "Description", "Original Amount", "Effective Amount", "Prorated"]
    )
    for window_name, buckets in (
        ("Quarterly", result.details.quarterly),
        ("Annual", result.details.yearly),
    ):
        for frequency, items in buckets.items():
            for item in items:
                writer.writerow(
                    [
                        window_name,
                        frequency.capitalize(),
                        getattr(item.record, "description", ""),
                        format_currency(item.original_amount),
                        format_currency(item.effective_amount),
                        "Yes" if item.is_prorated else "No",
                    ]
                )
    writer.writerow([])


def _write_cost_section(writer, label: str, records: list[Any]) -> None:
    with_period = any(getattr(r, "start_date", None) and getattr(r, "end_date", None) for r in records)
    with_due = any(getattr(r, "due_date", None) for r in records)
    with_notes = any(getattr(r, "notes", None) for r in records)

    headers = ["Description", "Category", "Base Amount", "VAT", "Total Amount", "Status"]
    if with_period:
        headers.append("Period")
    if with_due:
        headers.append("Due Date")
    if with_notes:
        headers.append("Notes")

    writer.writerow([label])
    writer.writerow(headers)

    subtotal = 0.0
    for record in records:
        total = record_total(record)
        subtotal += total
        row = [
            getattr(record, "description", ""),
            getattr(record, "category", ""),
            format_currency(getattr(record, "base_amount", getattr(record, "amount", 0.0))),
            format_currency(getattr(record, "vat_amount", 0.0)),
            format_currency(total),
            _status(record),
        ]
        if with_period:
            start, end = getattr(record, "start_date", None), getattr(record, "end_date", None)
            row.append(f"{_format_date(start)} - {_format_date(end)}" if start and end else "")
        if with_due:
            row.append(_format_date(getattr(record, "due_date", None)))
        if with_notes:
            row.append(getattr(record, "notes", None) or "")
        writer.writerow(row)

    writer.writerow(["SUBTOTAL", "", "", "", "", format_currency(subtotal)])
    writer.writerow([])


def _write_summary_totals(writer, totals: list[CostTotal]) -> None:
    writer.writerow(["SUMMARY TOTALS"])
    writer.writerow(["Frequency", "Count", "Total Amount"])
    if not totals:
        writer.writerow(["No summary data available"])
        return
    for total in totals:
        writer.writerow([_summary_label(total), total.count, format_currency(total.total)])


def build_report_csv(
    *,
    result: ProjectionResult,
    records: Iterable[Any],
    detailed: bool = False,
    generated_at: datetime | None = None,
) -> str:
    """Render the cost report as CSV text.

    Blocks, in order: header, projections summary, the detailed breakdown
    (only when ``detailed``), one listing per cost group with a subtotal, and
    the summary totals table.
    """

    snapshot = list(records)
    stamp = generated_at or datetime.now()
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")

    writer.writerow([REPORT_TITLE])
    writer.writerow([f"Generated: {stamp.strftime('%d/%m/%Y %H:%M:%S')}"])
    writer.writerow([])

    _write_projection_summary(writer, result)
    if detailed:
        _write_detailed_breakdown(writer, result)

    for label, matches in _SECTIONS:
        section = [record for record in snapshot if matches(record)]
        if section:
            _write_cost_section(writer, label, section)

    _write_summary_totals(writer, summarize_totals(snapshot))
    return buffer.getvalue()


def export_report_csv(
    *,
    result: ProjectionResult,
    records: Iterable[Any],
    output_path: Path,
    detailed: bool = False,
    generated_at: datetime | None = None,
) -> Path:
    """Write the cost report to ``output_path`` and return the path."""

    content = build_report_csv(
        result=result, records=records, detailed=detailed, generated_at=generated_at
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        fh.write(content)
    return output_path


def default_report_filename(today: date | None = None, prefix: str = "dealership-costs") -> str:
    """File name used for exports, e.g. ``dealership-costs-2024-05-01.csv``."""

    return f"{prefix}-{(today or date.today()).isoformat()}.csv"
