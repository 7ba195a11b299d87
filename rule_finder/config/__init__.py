from rule_finder.config.adapter import ConfigResolverAdapter, effective_config_from
from rule_finder.config.interfaces import IConfigResolver
from rule_finder.config.loader import FileConfigResolver
from rule_finder.config.severity import normalize_severity

__all__ = [
    "ConfigResolverAdapter",
    "FileConfigResolver",
    "IConfigResolver",
    "effective_config_from",
    "normalize_severity",
]
