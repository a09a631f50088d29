"""Report generation for the financial document.

Reports are read-only projections of a Document: a printable summary in
plain text or Markdown, and an iCalendar feed of case deadlines. Nothing
here writes to the store.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

import structlog

from clearsplit_core.deadlines import disclosure_progress, next_upcoming_deadline
from clearsplit_core.formatting import format_percent, format_usd
from clearsplit_core.models import Deadline, Document
from clearsplit_core.normalizer import to_monthly
from clearsplit_core.scenarios import compare_scenarios, document_summary
from clearsplit_core.wizard import STEP_INFO

logger = structlog.get_logger()

DISCLAIMER = (
    "This report is for informational purposes only. "
    "Consult a qualified professional for advice."
)

SUPPORTED_FORMATS = ("text", "markdown")


@dataclass
class ReportSection:
    """A section of the report."""

    title: str
    lines: list[str] = field(default_factory=list)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _table(header: list[str], rows: list[list[str]]) -> list[str]:
    """Fixed-width text table; an empty list renders as "(none)"."""
    if not rows:
        return ["(none)"]
    widths = [len(h) for h in header]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths)
    out = [fmt.format(*header), "  ".join("-" * w for w in widths)]
    out.extend(fmt.format(*row) for row in rows)
    return out


class ReportGenerator:
    """
    Generate a summary report of a Document.

    Reports include:
    - Profile header
    - Document checklist
    - Assets, liabilities, income and expenses (monthly equivalents)
    - Totals and per-scenario summaries
    - Divorce case: deadlines, disclosures, support request
    """

    def __init__(self, today: Optional[date] = None):
        self._today = today
        self._sections: list[ReportSection] = []

    def generate(self, document: Document, format: str = "text") -> str:
        """
        Generate the report.

        Args:
            document: Snapshot to report on
            format: Output format ("text" or "markdown")

        Returns:
            Formatted report string

        Raises:
            ValueError: If the format is not supported
        """
        if format not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported report format: {format}")

        self._sections = []
        self._add_header(document)
        self._add_checklist(document)
        self._add_assets(document)
        self._add_liabilities(document)
        self._add_flows(document)
        self._add_summary(document)
        self._add_scenarios(document)
        self._add_divorce_case(document)

        logger.info("report_generated", format=format, sections=len(self._sections))

        if format == "markdown":
            return self._format_markdown()
        return self._format_text()

    def _add_header(self, document: Document) -> None:
        profile = document.profile
        today = self._today or date.today()
        self._sections.append(
            ReportSection(
                title="Header",
                lines=[
                    "FINANCIAL ORGANIZER REPORT",
                    "",
                    f"Name: {profile.full_name}",
                    f"Email: {profile.email}",
                    f"Jurisdiction: {profile.jurisdiction}",
                    f"Report Date: {today.strftime('%B %d, %Y')}",
                ],
            )
        )

    def _add_checklist(self, document: Document) -> None:
        rows = [[item.label, item.category, _yes_no(item.done)] for item in document.checklist]
        done = sum(1 for item in document.checklist if item.done)
        lines = _table(["Checklist Item", "Category", "Done"], rows)
        lines.append(f"{done} of {len(rows)} gathered")
        self._sections.append(ReportSection(title="Document Checklist", lines=lines))

    def _add_assets(self, document: Document) -> None:
        rows = [[a.name, format_usd(a.value), a.notes] for a in document.assets]
        self._sections.append(
            ReportSection(title="Assets", lines=_table(["Asset", "Value", "Notes"], rows))
        )

    def _add_liabilities(self, document: Document) -> None:
        rows = [
            [l.name, format_usd(l.balance), format_percent(l.rate), format_usd(l.payment), l.notes]
            for l in document.liabilities
        ]
        self._sections.append(
            ReportSection(
                title="Liabilities",
                lines=_table(["Liability", "Balance", "Rate", "Payment", "Notes"], rows),
            )
        )

    def _add_flows(self, document: Document) -> None:
        for title, label, items in (
            ("Income", "Income Source", document.income),
            ("Expenses", "Expense", document.expenses),
        ):
            rows = [
                [
                    item.name,
                    format_usd(to_monthly(item.amount, item.frequency)),
                    item.frequency.value,
                ]
                for item in items
            ]
            self._sections.append(
                ReportSection(
                    title=title,
                    lines=_table([label, "Amount (Monthly)", "Frequency"], rows),
                )
            )

    def _add_summary(self, document: Document) -> None:
        summary = document_summary(document)
        self._sections.append(
            ReportSection(
                title="Summary",
                lines=[
                    f"Net Worth: {format_usd(summary.net_worth)}",
                    f"Monthly Income: {format_usd(summary.income)}",
                    f"Monthly Expenses: {format_usd(summary.expenses)}",
                    f"Monthly Cash Flow: {format_usd(summary.cash_flow)}",
                ],
            )
        )

    def _add_scenarios(self, document: Document) -> None:
        rows = [
            [
                document.scenarios[key].name or key,
                format_usd(s.income),
                format_usd(s.expenses),
                format_usd(s.cash_flow),
                format_usd(s.net_worth),
            ]
            for key, s in compare_scenarios(document).items()
        ]
        self._sections.append(
            ReportSection(
                title="Scenarios",
                lines=_table(["Scenario", "Income", "Expenses", "Cash Flow", "Net Worth"], rows),
            )
        )

    def _add_divorce_case(self, document: Document) -> None:
        case = document.divorce
        support = case.support
        lines = [
            f"Case Type: {case.case_type}",
            f"Filing State: {case.filing_state}",
            f"Children: {case.children}",
            f"Current Step: {STEP_INFO[case.wizard_step].title}",
            "",
            "Support Request",
            f"  Alimony (monthly): {format_usd(support.requested_alimony_monthly or 0)}",
            f"  Child support (monthly): {format_usd(support.requested_child_support_monthly or 0)}",
            f"  Start date: {support.start_date_iso or '-'}",
            "",
            "Contacts",
        ]
        lines.extend(
            _table(
                ["Name", "Role", "Email", "Phone"],
                [[c.name, c.role, c.email, c.phone] for c in case.attorney_contacts],
            )
        )

        lines.extend(["", "Deadlines"])
        lines.extend(
            _table(
                ["Deadline", "Date", "Done"],
                [[d.label, d.date_iso, _yes_no(d.done)] for d in case.deadlines],
            )
        )
        upcoming = next_upcoming_deadline(case.deadlines, today=self._today)
        if upcoming is not None:
            lines.append(f"Next: {upcoming.label} on {upcoming.date_iso}")

        lines.extend(["", f"Disclosures ({disclosure_progress(case.disclosures)}% provided)"])
        lines.extend(
            _table(
                ["Disclosure", "Provided", "Notes"],
                [[d.label, _yes_no(d.provided), d.notes] for d in case.disclosures],
            )
        )
        self._sections.append(ReportSection(title="Divorce Case", lines=lines))

    def _format_text(self) -> str:
        """Format report as plain text."""
        output: list[str] = []

        for section in self._sections:
            if section.title != "Header":
                output.append("")
                output.append("=" * 60)
                output.append(section.title.upper())
                output.append("=" * 60)
            output.extend(section.lines)

        output.append("")
        output.append("=" * 60)
        output.append("END OF REPORT")
        output.append("=" * 60)
        output.append("")
        output.append(f"DISCLAIMER: {DISCLAIMER}")

        return "\n".join(output)

    def _format_markdown(self) -> str:
        """Format report as Markdown."""
        output: list[str] = []

        for section in self._sections:
            if section.title == "Header":
                output.append(f"# {section.lines[0].title()}")
                output.extend(f"- {line}" for line in section.lines[2:])
            else:
                output.append(f"\n## {section.title}\n")
                output.append("```")
                output.extend(section.lines)
                output.append("```")

        output.append("\n---\n")
        output.append(f"**DISCLAIMER:** {DISCLAIMER}")

        return "\n".join(output)


# =============================================================================
# CALENDAR
# =============================================================================


def _ics_escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def build_calendar(
    deadlines: Iterable[Deadline],
    now: Optional[datetime] = None,
    name: str = "Case Deadlines",
) -> str:
    """Render deadlines as an iCalendar (RFC 5545) document.

    Every deadline with a valid ``YYYY-MM-DD`` date becomes one all-day
    VEVENT; undated or unparseable entries are skipped. Completed
    deadlines are kept and marked ``STATUS:COMPLETED``.
    """
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//clearsplit//deadlines//EN",
        "CALSCALE:GREGORIAN",
        f"X-WR-CALNAME:{_ics_escape(name)}",
    ]
    skipped = 0
    for index, deadline in enumerate(deadlines):
        try:
            day = date.fromisoformat(deadline.date_iso[:10])
        except ValueError:
            skipped += 1
            continue
        uid = deadline.id or f"deadline-{index}"
        lines.extend(
            [
                "BEGIN:VEVENT",
                f"UID:{uid}@clearsplit",
                f"DTSTAMP:{stamp}",
                f"DTSTART;VALUE=DATE:{day:%Y%m%d}",
                f"DTEND;VALUE=DATE:{day + timedelta(days=1):%Y%m%d}",
                f"SUMMARY:{_ics_escape(deadline.label)}",
            ]
        )
        if deadline.done:
            lines.append("STATUS:COMPLETED")
        lines.append("END:VEVENT")
    lines.append("END:VCALENDAR")

    if skipped:
        logger.debug("calendar_deadlines_skipped", count=skipped)
    return "\r\n".join(lines) + "\r\n"


__all__ = [
    "DISCLAIMER",
    "ReportSection",
    "ReportGenerator",
    "build_calendar",
]
