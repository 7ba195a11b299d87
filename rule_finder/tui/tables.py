from rich.columns import Columns
from rich.table import Column, Table
from rich.text import Text

from rule_finder.models import EffectiveConfig, FinderOptions, RuleDetailRow, Severity
from rule_finder.tui.enums import SEVERITY_STYLE, UIStyle
from rule_finder.utils import compact_home_path


class OverviewTable:
    @staticmethod
    def summary_block(target: str, config: EffectiveConfig, options: FinderOptions):
        flags = []
        if options.omit_core:
            flags.append("no-core")
        if options.include_deprecated:
            flags.append("include=deprecated")
        if options.extensions:
            flags.append(f"ext={','.join(options.extensions)}")

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Target", Text(compact_home_path(target)))
        config_path = compact_home_path(config.config_path) if config.config_path else "(none)"
        table.add_row("Config", Text(config_path))
        table.add_row("Plugins", Text(", ".join(config.plugins) or "none"))
        table.add_row("Severities", OverviewTable.severity_counts(config))
        table.add_row("Options", "  ".join(flags) or "defaults")
        return table

    @staticmethod
    def severity_counts(config: EffectiveConfig) -> str:
        counts = {severity.value: 0 for severity in Severity}
        for severity in config.rules.values():
            counts[severity.value] += 1
        return "  ".join(f"{key}={value}" for key, value in counts.items())


class RuleTable:
    @staticmethod
    def names_block(rules: list[str]):
        if not rules:
            return Text("No rules found.", style=UIStyle.DIM.value)
        return Columns([Text(rule) for rule in rules], equal=True, column_first=True)

    @staticmethod
    def details_table(rows: list[RuleDetailRow]) -> Table:
        table = Table(
            Column(header="Rule", overflow="fold", max_width=48),
            Column(header="Source", overflow="ellipsis", max_width=32),
            Column(header="Severity", width=9),
            Column(header="Deprecated", width=10),
            Column(header="Replaced by", overflow="ellipsis"),
            Column(header="Docs", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            severity = ""
            if row.severity is not None:
                style = SEVERITY_STYLE.get(row.severity, UIStyle.WHITE.value)
                severity = f"[{style}]{row.severity.value}[/{style}]"
            deprecated = f"[{UIStyle.MAGENTA.value}]yes[/{UIStyle.MAGENTA.value}]" if row.deprecated else ""
            table.add_row(
                Text(row.rule),
                Text(row.source),
                severity,
                deprecated,
                Text(", ".join(row.replaced_by)),
                Text(row.docs_url),
            )
        return table

