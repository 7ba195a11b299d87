import sys
import json
from pathlib import Path
from typing import Any, Callable, Optional

from click.testing import CliRunner
import pytest
import yaml


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from rule_finder.catalog.loader import IPluginLoader  # noqa: E402
from rule_finder.catalog.sources import BaseRegistrySource  # noqa: E402
from rule_finder.config.interfaces import IConfigResolver  # noqa: E402
from rule_finder.errors import PluginLoadError  # noqa: E402
from rule_finder.finder import RuleFinder  # noqa: E402
from rule_finder.models import FinderOptions  # noqa: E402


class FakePluginLoader(IPluginLoader):
    def __init__(self, plugins: Optional[dict[str, Any]] = None) -> None:
        self.plugins = plugins or {}
        self.calls: list[str] = []

    def load(self, package_name: str) -> Any:
        self.calls.append(package_name)
        plugin = self.plugins.get(package_name)
        if plugin is None:
            raise PluginLoadError(package_name, "not installed")
        if isinstance(plugin, Exception):
            raise plugin
        return plugin


class FakeConfigResolver(IConfigResolver):
    def __init__(self, result: Any = None, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[Path, Any]] = []

    def resolve_config(self, path: Path, extensions: Any) -> Any:
        self.calls.append((path, extensions))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_yaml():
    def _write(path: Path, payload: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def core_rules() -> dict[str, Any]:
    return {
        "eqeqeq": {},
        "no-console": {},
        "valid-jsdoc": {"deprecated": True},
    }


@pytest.fixture
def plugin_a() -> dict[str, Any]:
    return {
        "rules": {
            "foo": {"meta": {"docs": {"url": "https://example.com/foo"}}},
            "bar": {"meta": {"deprecated": True, "replacedBy": ["foo"]}},
        }
    }


@pytest.fixture
def make_finder(core_rules: dict[str, Any]) -> Callable[..., RuleFinder]:
    def _make(
        rules: dict[str, Any],
        plugins: Optional[dict[str, Any]] = None,
        plugin_order: Optional[list[str]] = None,
        core: Optional[dict[str, Any]] = None,
        **options: Any,
    ) -> RuleFinder:
        plugins = plugins or {}
        resolver = FakeConfigResolver(
            {
                "rules": rules,
                "plugins": plugin_order if plugin_order is not None else list(plugins),
            }
        )
        return RuleFinder(
            "project",
            FinderOptions.from_values(**options),
            resolver=resolver,
            loader=FakePluginLoader(plugins),
            base_source=BaseRegistrySource(core if core is not None else core_rules),
        )

    return _make


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()


@pytest.fixture
def fake_loader() -> type[FakePluginLoader]:
    return FakePluginLoader


@pytest.fixture
def fake_resolver() -> type[FakeConfigResolver]:
    return FakeConfigResolver
