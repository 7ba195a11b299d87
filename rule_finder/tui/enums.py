from enum import Enum

from rule_finder.models import RuleQuery, Severity


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


SEVERITY_STYLE = {
    Severity.ERROR: UIStyle.RED.value,
    Severity.WARN: UIStyle.YELLOW.value,
    Severity.OFF: UIStyle.DIM.value,
}

QUERY_STYLE = {
    RuleQuery.CURRENT: UIStyle.GREEN.value,
    RuleQuery.PLUGIN: UIStyle.CYAN.value,
    RuleQuery.ALL_AVAILABLE: UIStyle.BLUE.value,
    RuleQuery.UNUSED: UIStyle.YELLOW.value,
    RuleQuery.DEPRECATED: UIStyle.MAGENTA.value,
}

QUERY_TITLE = {
    RuleQuery.CURRENT: "current rules",
    RuleQuery.PLUGIN: "plugin rules",
    RuleQuery.ALL_AVAILABLE: "all-available rules",
    RuleQuery.UNUSED: "unused rules",
    RuleQuery.DEPRECATED: "deprecated rules",
}
