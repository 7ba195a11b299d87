"""Merge the base registry with every plugin's rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from rule_finder.catalog.loader import IPluginLoader, ModulePluginLoader
from rule_finder.catalog.sources import BaseRegistrySource, IRuleSource, PluginRuleSource
from rule_finder.constants import CORE_SOURCE_LABEL
from rule_finder.errors import PluginLoadError
from rule_finder.models import RuleCatalog

logger = logging.getLogger(__name__)

PluginResult = Union[RuleCatalog, PluginLoadError]


@dataclass
class AggregatedCatalog:
    rules: RuleCatalog
    origins: dict[str, str] = field(default_factory=dict)
    errors: list[PluginLoadError] = field(default_factory=list)

    def plugin_rule_ids(self) -> list[str]:
        return [
            rule_id
            for rule_id, origin in self.origins.items()
            if origin != CORE_SOURCE_LABEL
        ]


def unique_in_order(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        ordered.append(name)
    return ordered


class RegistryAggregator:
    def __init__(
        self,
        base_source: Optional[IRuleSource] = None,
        loader: Optional[IPluginLoader] = None,
    ) -> None:
        self.base_source = base_source or BaseRegistrySource()
        self.loader = loader or ModulePluginLoader()

    def base_rules(self, omit_core: bool) -> RuleCatalog:
        if omit_core:
            return {}
        return dict(self.base_source.rules())

    def load_plugin(self, package_name: str) -> PluginResult:
        try:
            return PluginRuleSource(package_name, loader=self.loader).rules()
        except PluginLoadError as exc:
            error = exc
        except Exception as exc:
            error = PluginLoadError(package_name, str(exc) or type(exc).__name__)
            error.__cause__ = exc
        logger.warning("%s", error)
        return error

    def assemble(
        self,
        base: RuleCatalog,
        plugin_results: Sequence[tuple[str, PluginResult]],
    ) -> AggregatedCatalog:
        rules: RuleCatalog = dict(base)
        origins = {rule_id: CORE_SOURCE_LABEL for rule_id in base}
        errors: list[PluginLoadError] = []

        for package_name, result in plugin_results:
            if isinstance(result, PluginLoadError):
                errors.append(result)
                continue
            for rule_id, metadata in result.items():
                rules[rule_id] = metadata
                origins[rule_id] = package_name

        logger.debug(
            "catalog holds %d rules (%d plugin errors)", len(rules), len(errors)
        )
        return AggregatedCatalog(rules=rules, origins=origins, errors=errors)

    def build(self, plugin_names: Sequence[str], omit_core: bool) -> AggregatedCatalog:
        base = self.base_rules(omit_core)
        results = [
            (name, self.load_plugin(name)) for name in unique_in_order(plugin_names)
        ]
        return self.assemble(base, results)

    def build_catalog(self, plugin_names: Sequence[str], omit_core: bool) -> RuleCatalog:
        return self.build(plugin_names, omit_core).rules
