"""Environment readers for configuration defaults."""

from __future__ import annotations

import os

from notifix.errors import ConfigurationError


def _read_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc


def _read_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def _read_names(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.getenv(name)
    if not value:
        return default
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _read_endpoints(name: str) -> dict[str, str]:
    """Parse ``counter=url`` pairs separated by commas."""
    value = os.getenv(name, "")
    endpoints: dict[str, str] = {}
    for pair in value.split(","):
        if not pair.strip():
            continue
        counter, sep, url = pair.partition("=")
        if not sep or not counter.strip() or not url.strip():
            raise ConfigurationError(f"{name} entries must look like counter=url, got {pair!r}")
        endpoints[counter.strip()] = url.strip()
    return endpoints
