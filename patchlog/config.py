"""Environment-driven settings."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from patchlog.constants import ABILITY_MATCH_POLICIES, DEFAULT_ABILITY_MATCH_POLICY

logger = logging.getLogger("patchlog")

ENV_FILE = Path(__file__).parent.parent / ".env"


def load_environment(env_file: Optional[Path] = None) -> None:
    """Load variables from a .env file without overriding the real environment."""
    load_dotenv(env_file or ENV_FILE)


@dataclass(frozen=True)
class Settings:
    catalog_path: Optional[str] = None
    ability_match_policy: str = DEFAULT_ABILITY_MATCH_POLICY
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Read PATCHLOG_* variables; unknown policies fall back to the default."""
        policy = os.getenv("PATCHLOG_ABILITY_MATCH", DEFAULT_ABILITY_MATCH_POLICY)
        if policy not in ABILITY_MATCH_POLICIES:
            logger.warning(
                f"Unknown PATCHLOG_ABILITY_MATCH {policy!r}, using {DEFAULT_ABILITY_MATCH_POLICY}"
            )
            policy = DEFAULT_ABILITY_MATCH_POLICY

        return cls(
            catalog_path=os.getenv("PATCHLOG_CATALOG_PATH") or None,
            ability_match_policy=policy,
            log_level=os.getenv("PATCHLOG_LOG_LEVEL", "WARNING").upper(),
            log_file=os.getenv("PATCHLOG_LOG_FILE") or None,
        )

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)
