"""
Application Settings

Environment configuration for the simulator.
"""

import os
from dataclasses import dataclass
from typing import Optional

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in TRUTHY


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    """Application settings from environment."""

    decentralization: int = 0
    log_level: str = "INFO"
    no_color: bool = False
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        Raises:
            ValueError: If an integer variable does not parse
        """
        return cls(
            decentralization=_env_int("NETCASCADE_DECENTRALIZATION") or 0,
            log_level=os.getenv("NETCASCADE_LOG_LEVEL", "INFO").upper(),
            no_color=_env_flag("NETCASCADE_NO_COLOR"),
            seed=_env_int("NETCASCADE_SEED"),
        )
