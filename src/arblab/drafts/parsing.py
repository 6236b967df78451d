"""Parse text-typed form fields into the finite numbers the engine expects."""

from __future__ import annotations

import math

_SIGN_ONLY = {"", "-", "+"}


def _to_float(raw: str) -> float | None:
    text = raw.strip()
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_num(raw: str, fallback: float = 0.0) -> float:
    """Parse ``raw``; empty, sign-only, non-numeric or non-finite text yields ``fallback``."""

    if raw.strip() in _SIGN_ONLY:
        return fallback
    value = _to_float(raw)
    return fallback if value is None else value


def parse_field(raw: str, previous: float) -> float:
    """Parse an edited field: blank or a lone sign is 0, garbage keeps ``previous``."""

    if raw.strip() in _SIGN_ONLY:
        return 0.0
    value = _to_float(raw)
    return previous if value is None else value


def parse_optional(raw: str) -> float | None:
    """Blank means "not set" (e.g. no payout override)."""

    if not raw.strip():
        return None
    return parse_num(raw, 0.0)

