from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

from rule_finder.constants import RULE_DELIMITER
from rule_finder.utils import normalize_extensions


class Severity(str, Enum):
    OFF = "off"
    WARN = "warn"
    ERROR = "error"


class RuleQuery(str, Enum):
    CURRENT = "current"
    PLUGIN = "plugin"
    ALL_AVAILABLE = "all-available"
    UNUSED = "unused"
    DEPRECATED = "deprecated"


@dataclass(frozen=True)
class RuleMetadata:
    deprecated: bool = False
    docs: Optional[Any] = None
    schema: Optional[Any] = None
    replaced_by: tuple[str, ...] = ()

    @property
    def docs_url(self) -> str:
        if isinstance(self.docs, Mapping):
            url = self.docs.get("url")
            return str(url) if url else ""
        if isinstance(self.docs, str):
            return self.docs
        return ""


RuleCatalog = dict[str, RuleMetadata]


def is_qualified(rule_id: str) -> bool:
    return RULE_DELIMITER in rule_id


@dataclass(frozen=True)
class EffectiveConfig:
    rules: Mapping[str, Severity]
    plugins: tuple[str, ...] = ()
    config_path: Optional[Path] = None

    def enabled_rules(self) -> list[str]:
        return [
            rule_id
            for rule_id, severity in self.rules.items()
            if severity != Severity.OFF
        ]


@dataclass(frozen=True)
class FinderOptions:
    omit_core: bool = False
    include_deprecated: bool = False
    extensions: tuple[str, ...] = ()
    verbose: bool = False

    @classmethod
    def from_values(
        cls,
        *,
        omit_core: bool = False,
        include_deprecated: bool = False,
        extensions: Optional[list[str] | tuple[str, ...]] = None,
        verbose: bool = False,
    ) -> "FinderOptions":
        return cls(
            omit_core=bool(omit_core),
            include_deprecated=bool(include_deprecated),
            extensions=normalize_extensions(extensions),
            verbose=bool(verbose),
        )


@dataclass
class RuleReport:
    rules: list[str]
    errors: list[Exception] = field(default_factory=list)

    def is_valid(self) -> bool:
        return not self.errors

    def __iter__(self) -> Iterator[Any]:
        yield self.rules
        yield self.errors


@dataclass(frozen=True)
class RuleDetailRow:
    rule: str
    source: str
    severity: Optional[Severity]
    deprecated: bool
    replaced_by: tuple[str, ...] = ()
    docs_url: str = ""

    def as_dict(self) -> dict[str, str]:
        return {
            "rule": self.rule,
            "source": self.source,
            "severity": self.severity.value if self.severity is not None else "",
            "deprecated": "yes" if self.deprecated else "",
            "replaced_by": ", ".join(self.replaced_by),
            "docs_url": self.docs_url,
        }
