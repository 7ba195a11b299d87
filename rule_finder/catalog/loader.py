"""Resolve plugin packages to their exported rules and configs."""

from __future__ import annotations

import importlib
import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Mapping

from rule_finder.catalog.namespace import derive_namespace, module_name_for, split_scope
from rule_finder.constants import PLUGIN_ENTRY_POINT_GROUP, PLUGIN_PACKAGE_PREFIX, SCOPE_MARKER
from rule_finder.errors import PluginLoadError
from rule_finder.models import RuleMetadata

logger = logging.getLogger(__name__)


class IPluginLoader(ABC):
    @abstractmethod
    def load(self, package_name: str) -> Any:
        """Return the plugin object for a package name or raise PluginLoadError."""
        raise NotImplementedError


class ModulePluginLoader(IPluginLoader):
    """Look up plugins among installed entry points, then by module import."""

    def __init__(self, group: str = PLUGIN_ENTRY_POINT_GROUP) -> None:
        self.group = group

    def load(self, package_name: str) -> Any:
        plugin = self._load_from_entry_points(package_name)
        if plugin is not None:
            return plugin

        candidates = self.module_candidates(package_name)
        for module_name in candidates:
            try:
                module = importlib.import_module(module_name)
            except ModuleNotFoundError as exc:
                if not _is_missing_module(module_name, exc.name):
                    raise PluginLoadError(package_name, str(exc)) from exc
                continue
            except Exception as exc:
                raise PluginLoadError(package_name, f"import failed: {exc}") from exc
            logger.debug("loaded plugin %s from module %s", package_name, module_name)
            return module

        raise PluginLoadError(
            package_name, f"no module found (tried {', '.join(candidates)})"
        )

    def _load_from_entry_points(self, package_name: str) -> Any | None:
        try:
            namespace = derive_namespace(package_name)
        except PluginLoadError:
            namespace = None
        names = {package_name}
        if namespace:
            names.add(namespace)

        for entry_point in entry_points(group=self.group):
            if entry_point.name not in names:
                continue
            try:
                plugin = entry_point.load()
            except Exception as exc:
                raise PluginLoadError(
                    package_name, f"entry point '{entry_point.value}' failed: {exc}"
                ) from exc
            logger.debug(
                "loaded plugin %s from entry point %s", package_name, entry_point.value
            )
            return plugin
        return None

    @staticmethod
    def module_candidates(package_name: str) -> list[str]:
        """Shorthand names try the `plugin-` prefixed module before the bare one."""
        candidates = [module_name_for(package_name)]
        scope, bare = split_scope(package_name.strip())
        if PLUGIN_PACKAGE_PREFIX.rstrip("-") not in bare:
            prefixed = f"{PLUGIN_PACKAGE_PREFIX}{bare}"
            if scope:
                prefixed = f"{SCOPE_MARKER}{scope}/{prefixed}"
            candidates.insert(0, module_name_for(prefixed))
        return candidates


def _is_missing_module(module_name: str, missing: str | None) -> bool:
    if not missing:
        return True
    return module_name == missing or module_name.startswith(f"{missing}.")


def _member(plugin: Any, name: str) -> Any:
    if isinstance(plugin, Mapping):
        return plugin.get(name)
    return getattr(plugin, name, None)


def plugin_rule_exports(package_name: str, plugin: Any) -> Mapping[str, Any]:
    rules = _member(plugin, "rules")
    if rules is None:
        raise PluginLoadError(package_name, "plugin does not export 'rules'")
    if not isinstance(rules, Mapping):
        raise PluginLoadError(package_name, "'rules' export is not a mapping")
    return rules


def plugin_config_exports(plugin: Any) -> Mapping[str, Any]:
    configs = _member(plugin, "configs")
    if isinstance(configs, Mapping):
        return configs
    return {}


def rule_metadata_from_export(export: Any) -> RuleMetadata:
    meta = _member(export, "meta")
    if meta is None:
        meta = export if isinstance(export, Mapping) else {}
    if not isinstance(meta, Mapping):
        meta = {key: getattr(meta, key) for key in dir(meta) if not key.startswith("_")}

    replaced_by = meta.get("replacedBy", meta.get("replaced_by", ()))
    if isinstance(replaced_by, str):
        replaced_by = (replaced_by,)

    return RuleMetadata(
        deprecated=bool(meta.get("deprecated", False)),
        docs=meta.get("docs"),
        schema=meta.get("schema"),
        replaced_by=tuple(str(item) for item in replaced_by or ()),
    )
