from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .types import DuplicatePolicy


_TRUE = {"1", "true", "yes"}
_FALSE = {"0", "false", "no"}


def _env_bool(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    lowered = val.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


def _env_str(name: str) -> Optional[str]:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    return val.strip()


@dataclass
class RegistrySettings:
    """
    Startup settings for a capability registry host.

    Environment:
        CAPREG_DUPLICATE_POLICY: "error" (default) or "replace"
        CAPREG_FREEZE:           freeze after startup population (default true)
        CAPREG_PLUGINS_FILE:     optional JSON/YAML file of extra plugin references
        CAPREG_LOG_LEVEL:        default "INFO"
        CAPREG_JSON_LOGS:        render logs as JSON (default false)
    """
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.ERROR
    freeze: bool = True
    plugins_file: Optional[str] = None
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        policy = _env_str("CAPREG_DUPLICATE_POLICY") or DuplicatePolicy.ERROR.value
        try:
            duplicate_policy = DuplicatePolicy(policy.lower())
        except ValueError as exc:
            allowed = ", ".join(p.value for p in DuplicatePolicy)
            raise ValueError(
                f"CAPREG_DUPLICATE_POLICY must be one of: {allowed} (got '{policy}')"
            ) from exc

        return cls(
            duplicate_policy=duplicate_policy,
            freeze=_env_bool("CAPREG_FREEZE", True),
            plugins_file=_env_str("CAPREG_PLUGINS_FILE"),
            log_level=(_env_str("CAPREG_LOG_LEVEL") or "INFO").upper(),
            json_logs=_env_bool("CAPREG_JSON_LOGS", False),
        )
