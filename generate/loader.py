# generate/loader.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict

from jsonschema import ValidationError
from jsonschema.validators import Draft7Validator
from pydantic import ValidationError as PydanticValidationError

from daogen.errors import DaoGenError
from daogen.meta_models import SchemaMeta

logger = logging.getLogger(__name__)

DEFAULT_SPEC_PATH = Path(__file__).resolve().parent / "schema_definitions" / "modelSchema.json"

class InvalidSchemaError(DaoGenError):
    pass

def _resolve_spec_path(spec_uri: str | None) -> Path:
    """
    Resolve the JSON-Schema file used to validate a document.
    A local `$schema` path in the document wins; http(s) URIs and missing
    files fall back to the bundled generate/schema_definitions/modelSchema.json.
    """
    if spec_uri and not spec_uri.startswith(("http://", "https://")):
        p = Path(spec_uri)
        if p.exists():
            return p
        logger.warning("$schema %s not found, using bundled %s", spec_uri, DEFAULT_SPEC_PATH)
    return DEFAULT_SPEC_PATH

def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise InvalidSchemaError(f"Failed to read {what} at {path}: {e}") from e

def validate_document(data: Dict[str, Any]) -> SchemaMeta:
    if not isinstance(data, dict):
        raise InvalidSchemaError("Schema document must be a JSON object")

    spec_path = _resolve_spec_path(data.get("$schema"))
    spec = _read_json(spec_path, "spec")

    try:
        Draft7Validator.check_schema(spec)
        Draft7Validator(spec).validate(data)
    except ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise InvalidSchemaError(f"Schema validation failed at {where}: {e.message}") from e

    try:
        return SchemaMeta.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidSchemaError(f"Schema document rejected: {e}") from e

def load_document(path: str | Path = "schema.json") -> SchemaMeta:
    meta_path = Path(path)
    if not meta_path.exists():
        raise InvalidSchemaError(f"Schema file not found at {path}")

    meta = validate_document(_read_json(meta_path, "schema document"))
    logger.info("Loaded schema document %s with %d entities", meta_path, len(meta.entities))
    return meta
