"""Locate and flatten `.lintrc` files into an effective config."""

from __future__ import annotations

import fnmatch
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import yaml

from rule_finder.catalog.loader import IPluginLoader, ModulePluginLoader, plugin_config_exports
from rule_finder.config.interfaces import IConfigResolver
from rule_finder.config.schema import JsonSchemaRepository
from rule_finder.config.severity import normalize_severity
from rule_finder.constants import (
    CONFIG_FILENAMES,
    DEFAULT_EXTENSIONS,
    PLUGIN_CONFIG_PREFIX,
    RULE_DELIMITER,
    VIRTUAL_FILE_STEM,
)
from rule_finder.errors import (
    ConfigResolutionError,
    InvalidConfigFormatError,
    InvalidConfigSchemaError,
    MissingConfigFileError,
    PluginLoadError,
)
from rule_finder.models import EffectiveConfig, Severity
from rule_finder.utils import read_json, read_yaml

logger = logging.getLogger(__name__)


@dataclass
class ConfigOverride:
    base_dir: Path
    patterns: list[str]
    plugins: list[str]
    rules: dict[str, Any]

    def matches(self, path: Path) -> bool:
        try:
            relative = path.relative_to(self.base_dir).as_posix()
        except ValueError:
            relative = path.name
        for pattern in self.patterns:
            candidates = [pattern]
            if pattern.startswith("**/"):
                candidates.append(pattern[3:])
            for candidate in candidates:
                if fnmatch.fnmatchcase(relative, candidate):
                    return True
                if fnmatch.fnmatchcase(path.name, candidate):
                    return True
        return False


@dataclass
class FlatConfig:
    plugins: list[str] = field(default_factory=list)
    rules: dict[str, Any] = field(default_factory=dict)
    overrides: list[ConfigOverride] = field(default_factory=list)

    def merge(self, other: "FlatConfig") -> None:
        _extend_unique(self.plugins, other.plugins)
        self.rules.update(other.rules)
        self.overrides.extend(other.overrides)


def _extend_unique(target: list[str], items: Sequence[str]) -> None:
    for item in items:
        if item not in target:
            target.append(item)


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


class FileConfigResolver(IConfigResolver):
    def __init__(
        self,
        loader: Optional[IPluginLoader] = None,
        schema_repository: Optional[JsonSchemaRepository] = None,
        default_extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    ) -> None:
        self.loader = loader or ModulePluginLoader()
        self.schema_repository = schema_repository or JsonSchemaRepository()
        self.default_extensions = tuple(default_extensions)

    def resolve_config(
        self, path: Path, extensions: Optional[Sequence[str]]
    ) -> EffectiveConfig:
        target = Path(path).expanduser().resolve()
        if not target.exists():
            raise ConfigResolutionError(target, "Target path does not exist")

        config_path = self.find_config_file(target)
        logger.debug("using config %s for %s", config_path, target)
        flat = self.load_file(config_path, chain=())

        plugins = list(flat.plugins)
        rules = dict(flat.rules)
        for virtual in self.virtual_files(target, extensions):
            for override in flat.overrides:
                if override.matches(virtual):
                    _extend_unique(plugins, override.plugins)
                    rules.update(override.rules)

        return EffectiveConfig(
            rules=self._normalize_rules(config_path, rules),
            plugins=tuple(plugins),
            config_path=config_path,
        )

    def find_config_file(self, target: Path) -> Path:
        if target.is_file() and target.name in CONFIG_FILENAMES:
            return target
        directory = target if target.is_dir() else target.parent
        for candidate_dir in (directory, *directory.parents):
            for filename in CONFIG_FILENAMES:
                candidate = candidate_dir / filename
                if candidate.is_file():
                    return candidate
        raise MissingConfigFileError(target)

    def virtual_files(
        self, target: Path, extensions: Optional[Sequence[str]]
    ) -> list[Path]:
        if target.is_file():
            return [target]
        return [
            target / f"{VIRTUAL_FILE_STEM}{extension}"
            for extension in (extensions or self.default_extensions)
        ]

    def load_file(self, path: Path, chain: tuple[Path, ...]) -> FlatConfig:
        resolved = path.resolve()
        if resolved in chain:
            cycle = " -> ".join(str(item) for item in (*chain, resolved))
            raise ConfigResolutionError(resolved, f"Circular extends ({cycle})")
        document = self.parse_file(resolved)
        return self.flatten(document, resolved, resolved.parent, (*chain, resolved))

    def parse_file(self, path: Path) -> dict[str, Any]:
        if not path.is_file():
            raise MissingConfigFileError(path)
        try:
            if path.suffix == ".json":
                payload = read_json(path)
            else:
                payload = read_yaml(path)
        except json.JSONDecodeError as exc:
            raise InvalidConfigFormatError(path, f"{exc.msg} at line {exc.lineno}") from exc
        except yaml.YAMLError as exc:
            raise InvalidConfigFormatError(path, str(exc).splitlines()[0]) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidConfigFormatError(path, str(exc)) from exc

        if payload is None:
            payload = {}
        self.validate(path, payload)
        return payload

    def validate(self, path: Path, payload: Any) -> None:
        error = self.schema_repository.first_error(payload)
        if error is not None:
            raise InvalidConfigSchemaError(path, error)

    def flatten(
        self,
        document: dict[str, Any],
        source: Path,
        base_dir: Path,
        chain: tuple[Path, ...],
    ) -> FlatConfig:
        flat = FlatConfig()
        for reference in _as_list(document.get("extends")):
            flat.merge(self.load_extends(reference, source, base_dir, chain))

        own = FlatConfig(
            plugins=_as_list(document.get("plugins")),
            rules=dict(document.get("rules") or {}),
            overrides=[
                ConfigOverride(
                    base_dir=base_dir,
                    patterns=_as_list(item.get("files")),
                    plugins=_as_list(item.get("plugins")),
                    rules=dict(item.get("rules") or {}),
                )
                for item in document.get("overrides") or []
            ],
        )
        flat.merge(own)
        return flat

    def load_extends(
        self, reference: str, source: Path, base_dir: Path, chain: tuple[Path, ...]
    ) -> FlatConfig:
        if reference.startswith(PLUGIN_CONFIG_PREFIX):
            return self.load_plugin_config(reference, source, base_dir, chain)
        extended = Path(reference).expanduser()
        if not extended.is_absolute():
            extended = base_dir / extended
        if not extended.exists():
            raise ConfigResolutionError(source, f"Extended config not found ({reference})")
        return self.load_file(extended, chain)

    def load_plugin_config(
        self, reference: str, source: Path, base_dir: Path, chain: tuple[Path, ...]
    ) -> FlatConfig:
        body = reference[len(PLUGIN_CONFIG_PREFIX) :]
        package_name, _, config_name = body.rpartition(RULE_DELIMITER)
        if not package_name or not config_name:
            raise ConfigResolutionError(source, f"Malformed plugin config reference ({reference})")

        try:
            plugin = self.loader.load(package_name)
        except PluginLoadError as exc:
            raise ConfigResolutionError(source, f"Cannot extend '{reference}': {exc}") from exc

        document = plugin_config_exports(plugin).get(config_name)
        if document is None:
            raise ConfigResolutionError(
                source, f"Plugin '{package_name}' has no config named '{config_name}'"
            )
        error = self.schema_repository.first_error(document)
        if error is not None:
            raise InvalidConfigSchemaError(source, f"{reference}: {error}")

        marker = Path(f"{source}#{reference}")
        if marker in chain:
            raise ConfigResolutionError(source, f"Circular extends ({reference})")
        return self.flatten(dict(document), source, base_dir, (*chain, marker))

    @staticmethod
    def _normalize_rules(path: Path, rules: dict[str, Any]) -> dict[str, Severity]:
        normalized: dict[str, Severity] = {}
        for rule_id, value in rules.items():
            try:
                normalized[rule_id] = normalize_severity(value)
            except ValueError as exc:
                raise InvalidConfigSchemaError(path, f"rule '{rule_id}' has {exc}") from exc
        return normalized
