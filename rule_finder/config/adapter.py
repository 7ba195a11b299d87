"""Thin pass-through to the configuration resolver."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from rule_finder.config.interfaces import IConfigResolver, ResolvedConfig
from rule_finder.config.loader import FileConfigResolver
from rule_finder.config.severity import normalize_severity
from rule_finder.errors import ConfigResolutionError, InvalidOptionError
from rule_finder.models import EffectiveConfig, Severity
from rule_finder.utils import normalize_extensions

logger = logging.getLogger(__name__)


def effective_config_from(path: Path, resolved: ResolvedConfig) -> EffectiveConfig:
    if isinstance(resolved, EffectiveConfig):
        return resolved
    if not isinstance(resolved, Mapping):
        raise ConfigResolutionError(path, "Resolver returned an unsupported result")

    raw_rules: Any = resolved.get("rules") or {}
    raw_plugins: Any = resolved.get("plugins") or ()
    if not isinstance(raw_rules, Mapping):
        raise ConfigResolutionError(path, "Resolved 'rules' is not a mapping")

    rules: dict[str, Severity] = {}
    for rule_id, value in raw_rules.items():
        try:
            rules[str(rule_id)] = normalize_severity(value)
        except ValueError as exc:
            raise ConfigResolutionError(path, f"Rule '{rule_id}' has {exc}") from exc

    config_path = resolved.get("config_path")
    return EffectiveConfig(
        rules=rules,
        plugins=tuple(str(name) for name in raw_plugins),
        config_path=Path(config_path) if config_path else None,
    )


class ConfigResolverAdapter:
    def __init__(self, resolver: Optional[IConfigResolver] = None) -> None:
        self.resolver = resolver or FileConfigResolver()

    def resolve(
        self, target_path: Path | str, extensions: Optional[Sequence[str]] = None
    ) -> EffectiveConfig:
        path = Path(target_path)
        normalized = normalize_extensions(extensions) or None
        logger.debug("resolving config for %s (extensions=%s)", path, normalized)
        try:
            resolved = self.resolver.resolve_config(path, normalized)
        except (ConfigResolutionError, InvalidOptionError):
            raise
        except Exception as exc:
            raise ConfigResolutionError(path, str(exc) or type(exc).__name__) from exc
        return effective_config_from(path, resolved)
