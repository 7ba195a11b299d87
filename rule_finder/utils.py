import json
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from rule_finder.errors import InvalidOptionError


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def read_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def normalize_extension(value: str) -> str:
    text = value.strip()
    if not text or text == "." or any(char.isspace() for char in text):
        raise InvalidOptionError(f"Invalid file extension: {value!r}")
    if "/" in text or "\\" in text:
        raise InvalidOptionError(f"File extension must not contain a path separator: {value!r}")
    if not text.startswith("."):
        text = f".{text}"
    return text


def normalize_extensions(values: Optional[Iterable[str]]) -> tuple[str, ...]:
    if not values:
        return ()
    normalized: list[str] = []
    for value in values:
        if not isinstance(value, str):
            raise InvalidOptionError(f"File extension must be a string: {value!r}")
        parts = [part for part in value.split(",") if part.strip()] or [value]
        for part in parts:
            extension = normalize_extension(part)
            if extension not in normalized:
                normalized.append(extension)
    return tuple(normalized)


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
