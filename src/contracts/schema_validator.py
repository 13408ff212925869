"""JSON Schema validation for solve reports."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from .jsoncanon import digest_without

_CONTRACT_ROOT = Path(__file__).resolve().parent / "PuzzleContracts"
_CATALOG_PATH = _CONTRACT_ROOT / "catalog.json"


class SchemaValidationError(RuntimeError):
    """Exception raised when a report fails validation."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


@dataclass(frozen=True)
class SchemaDescriptor:
    """Descriptor that binds a report type to its active schema."""

    type: str
    version: str
    schema_id: str
    schema_path: str


@lru_cache(maxsize=1)
def _load_catalog() -> Dict[str, SchemaDescriptor]:
    raw = json.loads(_CATALOG_PATH.read_text("utf-8"))
    return {
        report_type: SchemaDescriptor(
            type=report_type,
            version=data["version"],
            schema_id=data["schema_id"],
            schema_path=data["schema_path"],
        )
        for report_type, data in raw.items()
    }


def get_schema_descriptor(report_type: str) -> SchemaDescriptor:
    catalog = _load_catalog()
    if report_type not in catalog:
        raise SchemaValidationError("schema-not-found", report_type)
    return catalog[report_type]


@lru_cache(maxsize=None)
def load_schema(schema_path: str) -> Dict[str, Any]:
    """Load a schema relative to the contracts root directory."""

    resolved = (_CONTRACT_ROOT / schema_path).resolve()
    try:
        return json.loads(resolved.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise SchemaValidationError("schema-not-found", schema_path) from exc


def _invariant(detail: str) -> None:
    raise SchemaValidationError("invariant-violation", detail)


def _check_invariants(obj: Dict[str, Any]) -> None:
    puzzle = obj["puzzle"]
    solution = obj["solution"]
    if obj["solved"] != (solution is not None):
        _invariant("solved must be true exactly when a solution is present")
    if solution is not None:
        for given, value in zip(puzzle, solution):
            if given != "0" and given != value:
                _invariant("solution must keep every given digit")
    if obj["canonical_hash"] != digest_without(obj, "canonical_hash"):
        _invariant("canonical_hash does not match report contents")


def validate_report(obj: Dict[str, Any]) -> None:
    """Validate a report against its JSON Schema and cross-field invariants."""

    if not isinstance(obj, dict):
        raise SchemaValidationError("invalid-report", "report must be an object")
    report_type = obj.get("type")
    if not isinstance(report_type, str):
        raise SchemaValidationError("invalid-report", "missing type")

    descriptor = get_schema_descriptor(report_type)
    schema = load_schema(descriptor.schema_path)
    if schema.get("$id") != descriptor.schema_id:
        raise SchemaValidationError("schema-mismatch", descriptor.schema_path)

    validator_cls = jsonschema.validators.validator_for(schema)
    validator_cls.check_schema(schema)
    try:
        validator_cls(schema).validate(obj)
    except jsonschema.ValidationError as exc:
        raise SchemaValidationError("invariant-violation", exc.message) from exc

    _check_invariants(obj)


__all__ = [
    "SchemaDescriptor",
    "SchemaValidationError",
    "get_schema_descriptor",
    "load_schema",
    "validate_report",
]
