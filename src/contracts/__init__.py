"""Canonical serialisation and schema checks for solve reports."""

from __future__ import annotations

from .jsoncanon import digest_without, jcs_dump, jcs_sha256
from .schema_validator import SchemaValidationError, validate_report

__all__ = ["SchemaValidationError", "digest_without", "jcs_dump", "jcs_sha256", "validate_report"]
