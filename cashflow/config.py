"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .utils import DEFAULT_CURRENCY

DEFAULT_LATENCY_SECONDS = 2.0


@dataclass(frozen=True)
class Settings:
    latency_seconds: float = DEFAULT_LATENCY_SECONDS
    seed: int | None = None
    currency: str = DEFAULT_CURRENCY
    log_level: str = "INFO"


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number (got {raw!r})") from exc
    if value < 0:
        raise ValueError(f"{name} must not be negative (got {raw!r})")
    return value


def _read_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``CASHFLOW_*`` environment variables."""

    source = os.environ if env is None else env
    return Settings(
        latency_seconds=_read_float(source, "CASHFLOW_LATENCY_SECONDS", DEFAULT_LATENCY_SECONDS),
        seed=_read_int(source, "CASHFLOW_SEED"),
        currency=(source.get("CASHFLOW_CURRENCY") or DEFAULT_CURRENCY).strip().upper(),
        log_level=(source.get("CASHFLOW_LOG_LEVEL") or "INFO").strip().upper(),
    )
