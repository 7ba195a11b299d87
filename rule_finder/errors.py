from pathlib import Path


class RuleFinderError(Exception):
    """Base user-facing application error."""


class ConfigResolutionError(RuleFinderError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingConfigFileError(ConfigResolutionError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="No lint config found for target")


class InvalidConfigFormatError(ConfigResolutionError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config format ({detail})")


class InvalidConfigSchemaError(ConfigResolutionError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class PluginLoadError(RuleFinderError):
    def __init__(self, plugin: str, message: str) -> None:
        self.plugin = plugin
        self.message = message
        super().__init__(f"Failed to load plugin '{plugin}' ({message})")


class InvalidOptionError(RuleFinderError):
    """Raised for malformed or conflicting finder options."""
