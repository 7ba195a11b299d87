from typing import Any

from rule_finder.models import Severity

_SEVERITY_BY_VALUE: dict[Any, Severity] = {
    0: Severity.OFF,
    1: Severity.WARN,
    2: Severity.ERROR,
    "0": Severity.OFF,
    "1": Severity.WARN,
    "2": Severity.ERROR,
    "off": Severity.OFF,
    "warn": Severity.WARN,
    "error": Severity.ERROR,
}


def normalize_severity(value: Any) -> Severity:
    """Accept 0/1/2, off/warn/error, or a list whose first item is one of those."""
    if isinstance(value, Severity):
        return value
    if isinstance(value, (list, tuple)):
        if not value:
            raise ValueError("empty rule setting")
        value = value[0]
    if isinstance(value, bool):
        raise ValueError(f"invalid severity {value!r}")
    if isinstance(value, str):
        value = value.strip().lower()
    try:
        return _SEVERITY_BY_VALUE[value]
    except (KeyError, TypeError):
        raise ValueError(f"invalid severity {value!r}") from None
