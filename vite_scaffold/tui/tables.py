from collections import Counter

from rich.markup import escape
from rich.panel import Panel
from rich.table import Column, Table

from vite_scaffold.models import (
    ActionPlan,
    Feature,
    InstallerCommand,
    OutcomeStatus,
    ReportEntry,
    RunReport,
)
from vite_scaffold.tui.enums import OUTCOME_STATUS_STYLE, RUN_STATUS_STYLE, UIStyle


class PlanTable:
    @staticmethod
    def summary_block(plan: ActionPlan, mode: str, root: str):
        counts = Counter(action.kind.value for action in plan)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Project", root)
        table.add_row("Actions", str(len(plan)))
        table.add_row("Kinds", "  ".join(chips))
        return table

    @staticmethod
    def actions_table(plan: ActionPlan, verbose: bool = False) -> Table:
        table = Table(
            Column(header="#", width=3, justify="right"),
            Column(header="Id", width=18),
            Column(header="Kind", width=20),
            Column(header="Target", overflow="ellipsis", max_width=48),
            Column(header="After", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for index, action in enumerate(plan, start=1):
            target = action.target
            if verbose and isinstance(action.payload, InstallerCommand):
                target = action.payload.display()
            table.add_row(
                str(index),
                action.id,
                action.kind.value,
                target,
                ", ".join(action.depends_on),
            )
        return table


class ReportTable:
    @staticmethod
    def entries_table(entries: list[ReportEntry]) -> Table:
        table = Table(
            Column(header="Id", width=18),
            Column(header="Status", width=28),
            Column(header="Target", overflow="ellipsis", max_width=48),
            Column(header="Detail", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for entry in entries:
            style = OUTCOME_STATUS_STYLE.get(entry.outcome.status, UIStyle.WHITE.value)
            status_text = f"[{style}]{entry.outcome.label()}[/{style}]"
            table.add_row(entry.action.id, status_text, escape(entry.action.target), escape(entry.outcome.detail))
        return table

    @staticmethod
    def features_table(features: dict[Feature, OutcomeStatus]) -> Table:
        table = Table("Feature", "Result", expand=True, header_style="bold")
        for feature, status in features.items():
            style = OUTCOME_STATUS_STYLE.get(status, UIStyle.WHITE.value)
            table.add_row(feature.value, f"[{style}]{status.value}[/{style}]")
        return table

    @staticmethod
    def stats_panel(report: RunReport) -> Panel:
        table = Table(show_header=False, box=None)
        for key, value in report.summary().items():
            table.add_row(f"[bold]{key}[/bold]", str(value))
        status = report.overall_status
        return Panel(
            table,
            title=f"apply: {status.value}",
            border_style=RUN_STATUS_STYLE.get(status, UIStyle.WHITE.value),
        )
