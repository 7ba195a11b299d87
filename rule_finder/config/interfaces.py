from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from rule_finder.models import EffectiveConfig

ResolvedConfig = Union[EffectiveConfig, Mapping[str, Any]]


class IConfigResolver(ABC):
    @abstractmethod
    def resolve_config(
        self, path: Path, extensions: Optional[Sequence[str]]
    ) -> ResolvedConfig:
        """Return the effective rules and ordered plugins for a target path.

        ``extensions`` is None when the caller gave none; the resolver then
        applies its own defaults. Missing or invalid configuration must raise
        ConfigResolutionError instead of returning a partial result.
        """
        raise NotImplementedError
