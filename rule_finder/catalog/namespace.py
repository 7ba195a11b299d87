"""Plugin package name conventions."""

from __future__ import annotations

from rule_finder.constants import PLUGIN_PACKAGE_PREFIX, RULE_DELIMITER, SCOPE_MARKER
from rule_finder.errors import PluginLoadError


def split_scope(package_name: str) -> tuple[str | None, str]:
    """Return (scope, bare_name); scope is None for unscoped packages."""
    if package_name.startswith(SCOPE_MARKER) and RULE_DELIMITER in package_name:
        scope, bare = package_name.split(RULE_DELIMITER, 1)
        return scope[len(SCOPE_MARKER) :], bare
    return None, package_name


def derive_namespace(package_name: str) -> str:
    """Map a plugin package name to the prefix its rules are declared under.

    ``@scope/plugin-foo`` and ``plugin-foo`` both yield ``foo``; so does
    ``lint-plugin-foo``. A scoped package without a remainder
    (``@scope/plugin``) yields the scope name.
    """
    scope, bare = split_scope(package_name.strip())

    marker = f"-{PLUGIN_PACKAGE_PREFIX}"
    if bare.startswith(PLUGIN_PACKAGE_PREFIX):
        namespace = bare[len(PLUGIN_PACKAGE_PREFIX) :]
    elif marker in bare:
        namespace = bare.split(marker, 1)[1]
    elif bare == PLUGIN_PACKAGE_PREFIX.rstrip("-") or bare.endswith(marker.rstrip("-")):
        namespace = ""
    else:
        namespace = bare

    if not namespace and scope:
        namespace = scope
    if not namespace:
        raise PluginLoadError(package_name, "cannot derive a rule namespace")
    if RULE_DELIMITER in namespace:
        raise PluginLoadError(
            package_name, f"namespace '{namespace}' contains '{RULE_DELIMITER}'"
        )
    return namespace


def qualify_rule_id(namespace: str, rule_name: str) -> str:
    return f"{namespace}{RULE_DELIMITER}{rule_name}"


def module_name_for(package_name: str) -> str:
    """Importable module path for a plugin package name."""
    scope, bare = split_scope(package_name.strip())
    module = bare.replace("-", "_").replace(".", "_")
    if scope:
        return f"{scope.replace('-', '_')}.{module}"
    return module
