from typing import Final


RULE_DELIMITER: Final[str] = "/"
SCOPE_MARKER: Final[str] = "@"
PLUGIN_PACKAGE_PREFIX: Final[str] = "plugin-"
PLUGIN_CONFIG_PREFIX: Final[str] = "plugin:"
PLUGIN_ENTRY_POINT_GROUP: Final[str] = "rule_finder.plugins"

CONFIG_FILENAMES: Final[tuple[str, ...]] = (
    ".lintrc.json",
    ".lintrc.yaml",
    ".lintrc.yml",
    ".lintrc",
)

DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (".js",)
VIRTUAL_FILE_STEM: Final[str] = "file"

CORE_SOURCE_LABEL: Final[str] = "core"
UNKNOWN_SOURCE_LABEL: Final[str] = "unknown"
