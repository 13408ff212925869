"""Canonical JSON helpers for solve reports.

Objects are serialised with sorted keys, no insignificant whitespace and
UTF-8 output so that identical reports always hash to the same digest.
Floats are written in their shortest round-tripping form; NaN and the
infinities are rejected.
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any, Mapping

__all__ = ["jcs_dump", "jcs_sha256", "digest_without"]


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN and Infinity are not permitted in canonical JSON")
        if obj.is_integer():
            return int(obj)
        return obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, Mapping):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj, key=str)}
    raise TypeError(f"Unsupported type for canonical JSON: {type(obj)!r}")


def jcs_dump(obj: Any) -> bytes:
    """Return canonical JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def jcs_sha256(obj: Any) -> str:
    """Return ``sha256-<hex>`` over the canonical representation of ``obj``."""

    digest = hashlib.sha256(jcs_dump(obj)).hexdigest()
    return f"sha256-{digest}"


def digest_without(obj: Mapping[str, Any], key: str) -> str:
    """Digest of ``obj`` with ``key`` removed, for self-describing hashes."""

    return jcs_sha256({k: v for k, v in obj.items() if k != key})
