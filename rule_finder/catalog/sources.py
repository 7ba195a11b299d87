"""Rule sources: the bundled base registry and loadable plugins."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional

from rule_finder.catalog.loader import (
    IPluginLoader,
    ModulePluginLoader,
    plugin_rule_exports,
    rule_metadata_from_export,
)
from rule_finder.catalog.namespace import derive_namespace, qualify_rule_id
from rule_finder.constants import CORE_SOURCE_LABEL, RULE_DELIMITER
from rule_finder.errors import PluginLoadError
from rule_finder.models import RuleCatalog
from rule_finder.utils import read_json

logger = logging.getLogger(__name__)

CORE_RULES_PATH = Path(__file__).resolve().parent / "core_rules.json"


class IRuleSource(ABC):
    @property
    @abstractmethod
    def label(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def rules(self) -> RuleCatalog:
        raise NotImplementedError


class BaseRegistrySource(IRuleSource):
    def __init__(
        self,
        rules: Optional[Mapping[str, Any]] = None,
        path: Path = CORE_RULES_PATH,
    ) -> None:
        self._rules = rules
        self._path = path

    @property
    def label(self) -> str:
        return CORE_SOURCE_LABEL

    def rules(self) -> RuleCatalog:
        exports = self._rules if self._rules is not None else read_json(self._path)
        catalog: RuleCatalog = {}
        for name, export in exports.items():
            if RULE_DELIMITER in name:
                raise ValueError(f"Core rule name must not contain '{RULE_DELIMITER}': {name}")
            catalog[name] = rule_metadata_from_export(export)
        return catalog


class PluginRuleSource(IRuleSource):
    def __init__(self, package_name: str, loader: Optional[IPluginLoader] = None) -> None:
        self.package_name = package_name
        self._loader = loader or ModulePluginLoader()

    @property
    def label(self) -> str:
        return self.package_name

    @property
    def namespace(self) -> str:
        return derive_namespace(self.package_name)

    def rules(self) -> RuleCatalog:
        namespace = self.namespace
        plugin = self._loader.load(self.package_name)
        exports = plugin_rule_exports(self.package_name, plugin)

        catalog: RuleCatalog = {}
        for name, export in exports.items():
            if not isinstance(name, str) or not name or RULE_DELIMITER in name:
                raise PluginLoadError(self.package_name, f"invalid rule name {name!r}")
            try:
                catalog[qualify_rule_id(namespace, name)] = rule_metadata_from_export(export)
            except (TypeError, ValueError) as exc:
                raise PluginLoadError(
                    self.package_name, f"invalid metadata for rule '{name}': {exc}"
                ) from exc
        logger.debug("plugin %s supplies %d rules", self.package_name, len(catalog))
        return catalog


def load_plugin_rules(
    package_name: str, loader: Optional[IPluginLoader] = None
) -> RuleCatalog:
    return PluginRuleSource(package_name, loader=loader).rules()
