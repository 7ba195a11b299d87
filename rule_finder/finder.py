"""Reconcile configured rules against the rules the registry and plugins supply."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from rule_finder.catalog.aggregator import AggregatedCatalog, RegistryAggregator, unique_in_order
from rule_finder.catalog.loader import IPluginLoader
from rule_finder.catalog.namespace import derive_namespace
from rule_finder.catalog.sources import IRuleSource
from rule_finder.config.adapter import ConfigResolverAdapter
from rule_finder.config.interfaces import IConfigResolver
from rule_finder.constants import CORE_SOURCE_LABEL, RULE_DELIMITER, UNKNOWN_SOURCE_LABEL
from rule_finder.errors import PluginLoadError
from rule_finder.models import (
    EffectiveConfig,
    FinderOptions,
    RuleDetailRow,
    RuleQuery,
    RuleReport,
    is_qualified,
)

logger = logging.getLogger(__name__)


class RuleFinder:
    """Answer current/plugin/available/unused/deprecated queries for one target.

    The effective config and the aggregated catalog are resolved on first use
    and memoized for the lifetime of the instance. Plugin load failures are
    returned with every report; config resolution failures raise.
    """

    def __init__(
        self,
        target: Path | str = ".",
        options: Optional[FinderOptions] = None,
        *,
        resolver: Optional[IConfigResolver] = None,
        loader: Optional[IPluginLoader] = None,
        base_source: Optional[IRuleSource] = None,
    ) -> None:
        self.target = Path(target)
        self.options = options or FinderOptions()
        self._adapter = ConfigResolverAdapter(resolver)
        self._aggregator = RegistryAggregator(base_source=base_source, loader=loader)
        self._config: Optional[EffectiveConfig] = None
        self._catalog: Optional[AggregatedCatalog] = None

    @property
    def config(self) -> EffectiveConfig:
        if self._config is None:
            self._config = self._resolve_config()
        return self._config

    @property
    def catalog(self) -> AggregatedCatalog:
        if self._catalog is None:
            self._catalog = self._aggregator.build(
                self.config.plugins, omit_core=self.options.omit_core
            )
        return self._catalog

    async def prepare(self) -> None:
        if self._config is None:
            self._config = await asyncio.to_thread(self._resolve_config)
        if self._catalog is None:
            names = unique_in_order(self._config.plugins)
            base = self._aggregator.base_rules(self.options.omit_core)
            results = await asyncio.gather(
                *(asyncio.to_thread(self._aggregator.load_plugin, name) for name in names)
            )
            self._catalog = self._aggregator.assemble(base, list(zip(names, results)))

    def _resolve_config(self) -> EffectiveConfig:
        return self._adapter.resolve(self.target, self.options.extensions or None)

    def _report(self, rule_ids: Iterable[str]) -> RuleReport:
        return RuleReport(rules=sorted(set(rule_ids)), errors=list(self.catalog.errors))

    def _current_ids(self) -> set[str]:
        enabled = self.config.enabled_rules()
        if self.options.omit_core:
            enabled = [rule_id for rule_id in enabled if is_qualified(rule_id)]
        return set(enabled)

    def _available_ids(self) -> set[str]:
        include_deprecated = self.options.include_deprecated
        return {
            rule_id
            for rule_id, metadata in self.catalog.rules.items()
            if include_deprecated or not metadata.deprecated
        }

    def get_current_rules(self) -> RuleReport:
        return self._report(self._current_ids())

    def get_plugin_rules(self) -> RuleReport:
        return self._report(self.catalog.plugin_rule_ids())

    def get_all_available_rules(self) -> RuleReport:
        return self._report(self._available_ids())

    def get_unused_rules(self) -> RuleReport:
        return self._report(self._available_ids() - self._current_ids())

    def get_deprecated_rules(self) -> RuleReport:
        deprecated = {
            rule_id
            for rule_id, metadata in self.catalog.rules.items()
            if metadata.deprecated
        }
        return self._report(self._current_ids() & deprecated)

    def run(self, query: RuleQuery) -> RuleReport:
        handlers: dict[RuleQuery, Callable[[], RuleReport]] = {
            RuleQuery.CURRENT: self.get_current_rules,
            RuleQuery.PLUGIN: self.get_plugin_rules,
            RuleQuery.ALL_AVAILABLE: self.get_all_available_rules,
            RuleQuery.UNUSED: self.get_unused_rules,
            RuleQuery.DEPRECATED: self.get_deprecated_rules,
        }
        return handlers[RuleQuery(query)]()

    def rule_details(self, rule_ids: Iterable[str]) -> list[RuleDetailRow]:
        rows: list[RuleDetailRow] = []
        for rule_id in rule_ids:
            metadata = self.catalog.rules.get(rule_id)
            rows.append(
                RuleDetailRow(
                    rule=rule_id,
                    source=self._source_of(rule_id),
                    severity=self.config.rules.get(rule_id),
                    deprecated=bool(metadata and metadata.deprecated),
                    replaced_by=metadata.replaced_by if metadata else (),
                    docs_url=metadata.docs_url if metadata else "",
                )
            )
        return rows

    def _source_of(self, rule_id: str) -> str:
        origin = self.catalog.origins.get(rule_id)
        if origin is not None:
            return origin
        if not is_qualified(rule_id):
            return CORE_SOURCE_LABEL
        # Rules of a plugin that failed to load still name their package.
        namespace = rule_id.split(RULE_DELIMITER, 1)[0]
        for error in self.catalog.errors:
            try:
                if derive_namespace(error.plugin) == namespace:
                    return error.plugin
            except PluginLoadError:
                continue
        return UNKNOWN_SOURCE_LABEL


async def create_rule_finder(
    target: Path | str = ".",
    options: Optional[FinderOptions] = None,
    *,
    resolver: Optional[IConfigResolver] = None,
    loader: Optional[IPluginLoader] = None,
    base_source: Optional[IRuleSource] = None,
) -> RuleFinder:
    """Build a finder with its config resolved and plugins loaded concurrently."""
    finder = RuleFinder(
        target, options, resolver=resolver, loader=loader, base_source=base_source
    )
    await finder.prepare()
    logger.debug(
        "finder ready for %s: %d configured rules, %d catalog rules",
        finder.target,
        len(finder.config.rules),
        len(finder.catalog.rules),
    )
    return finder
