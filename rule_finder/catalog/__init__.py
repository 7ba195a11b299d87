from rule_finder.catalog.aggregator import RegistryAggregator
from rule_finder.catalog.loader import IPluginLoader, ModulePluginLoader
from rule_finder.catalog.namespace import derive_namespace, qualify_rule_id
from rule_finder.catalog.sources import (
    BaseRegistrySource,
    IRuleSource,
    PluginRuleSource,
    load_plugin_rules,
)

__all__ = [
    "BaseRegistrySource",
    "IPluginLoader",
    "IRuleSource",
    "ModulePluginLoader",
    "PluginRuleSource",
    "RegistryAggregator",
    "derive_namespace",
    "load_plugin_rules",
    "qualify_rule_id",
]
