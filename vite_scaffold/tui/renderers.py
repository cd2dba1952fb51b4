from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vite_scaffold.models import ActionPlan, RunReport
from vite_scaffold.tui.enums import UIStyle
from vite_scaffold.tui.sections import UISection
from vite_scaffold.tui.tables import PlanTable, ReportTable
from vite_scaffold.utils import compact_home


class ScaffoldConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_plan(self, plan: ActionPlan, mode: str, root: str, verbose: bool = False) -> None:
        self.console.print(
            UISection.panel(
                "plan overview",
                PlanTable.summary_block(plan, mode=mode, root=compact_home(root)),
                style=UIStyle.BLUE.value,
            )
        )
        if len(plan) == 0:
            self.console.print(UISection.panel("actions", "No actions required.", style=UIStyle.DIM.value))
            return
        self.console.print(
            UISection.panel(
                "actions",
                PlanTable.actions_table(plan, verbose=verbose),
                style=UIStyle.CYAN.value,
            )
        )

    def render_report(self, report: RunReport) -> None:
        if report.entries:
            self.console.print(
                UISection.panel(
                    "outcomes",
                    ReportTable.entries_table(report.entries),
                    style=UIStyle.CYAN.value,
                )
            )
            self.console.print(
                UISection.panel(
                    "features",
                    ReportTable.features_table(report.feature_status()),
                    style=UIStyle.MAGENTA.value,
                )
            )

        failures = [
            f"{entry.action.id}: {entry.outcome.label()} {entry.outcome.detail}"
            for entry in report.entries
            if entry.outcome.is_failed
        ]
        if failures:
            self.console.print(
                UISection.panel(
                    "failures",
                    escape(compact_home(UISection.bullets(failures))),
                    style=UIStyle.RED.value,
                )
            )
        if report.fault is not None:
            self.console.print(
                UISection.panel(
                    "aborted",
                    escape(compact_home(report.fault)),
                    style=UIStyle.RED.value,
                )
            )
        if report.pending:
            self.console.print(
                UISection.panel(
                    "not run",
                    UISection.bullets(report.pending),
                    style=UIStyle.YELLOW.value,
                )
            )
        self.console.print(ReportTable.stats_panel(report))

    def render_options(self, options: list[tuple[str, str]]) -> None:
        table = Table("Option", "Description", expand=True, header_style="bold")
        for name, description in options:
            table.add_row(name, description)
        self.console.print(UISection.panel("options", table, style=UIStyle.BLUE.value))
