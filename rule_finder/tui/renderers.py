from typing import Optional

from rich.console import Console

from rule_finder.models import EffectiveConfig, FinderOptions, RuleDetailRow, RuleQuery, RuleReport
from rule_finder.tui.enums import QUERY_STYLE, QUERY_TITLE, UIStyle
from rule_finder.tui.sections import UISection
from rule_finder.tui.tables import OverviewTable, RuleTable


class RuleConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_overview(self, target: str, config: EffectiveConfig, options: FinderOptions) -> None:
        self.console.print(
            UISection.wrap(
                "rule finder",
                OverviewTable.summary_block(target, config, options),
                style=UIStyle.BLUE.value,
            )
        )

    def render_report(
        self,
        query: RuleQuery,
        report: RuleReport,
        details: Optional[list[RuleDetailRow]] = None,
    ) -> None:
        count = len(report.rules)
        noun = "rule" if count == 1 else "rules"
        body = RuleTable.details_table(details) if details else RuleTable.names_block(report.rules)
        self.console.print(
            UISection.wrap(
                QUERY_TITLE[query],
                body,
                style=QUERY_STYLE[query],
                subtitle=f"{count} {noun} found",
            )
        )

    def render_errors(self, errors: list[Exception]) -> None:
        if not errors:
            return
        self.console.print(UISection.bullets("errors", errors, style=UIStyle.RED.value))

    def render_no_option(self) -> None:
        self.console.print(
            UISection.note(
                "usage",
                "No option provided, please provide a valid option.\n"
                "- rule-finder -c [FILE]   list current rules\n"
                "- rule-finder -u [FILE]   list unused rules\n"
                "- rule-finder --help      show all options",
                style=UIStyle.YELLOW.value,
            )
        )
