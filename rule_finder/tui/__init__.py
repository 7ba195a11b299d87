from rule_finder.tui.renderers import RuleConsoleUI

__all__ = ["RuleConsoleUI"]
