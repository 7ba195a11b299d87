import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

CONFIG_SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


class JsonSchemaRepository:
    def __init__(self, local_schema_path: Path = CONFIG_SCHEMA_PATH) -> None:
        self.local_schema_path = local_schema_path
        self._schema: dict[str, Any] | None = None

    def load_schema(self) -> dict[str, Any]:
        if self._schema is None:
            self._schema = json.loads(self.local_schema_path.read_text(encoding="utf-8"))
        return self._schema

    def validator(self) -> Draft202012Validator:
        return Draft202012Validator(self.load_schema())

    def first_error(self, payload: Any) -> str | None:
        error = next(iter(self.validator().iter_errors(payload)), None)
        if error is None:
            return None
        return format_schema_error(error)
