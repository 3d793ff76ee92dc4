"""
WordMaster – Configuration
===========================
Named scheduling constants plus application settings.

Every threshold of the SM-2 scheduler lives in :class:`SchedulerConfig` so
it can be tuned without touching the algorithm.  Values can be overridden
from the environment (``WORDMASTER_<FIELD>``), optionally loaded from a
``.env`` file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from core.errors import InvalidInput

log = logging.getLogger(__name__)

ENV_PREFIX = "WORDMASTER_"
SECONDS_PER_DAY = 24 * 60 * 60

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class SchedulerConfig:
    """Tunable constants of the scheduling engine and progress classifier."""

    # Quality scale (0 = total blackout … 5 = perfect recall)
    min_quality: int = 0
    max_quality: int = 5
    passing_threshold: int = 3

    # Ease factor
    default_ease_factor: float = 2.5
    minimum_ease_factor: float = 1.3
    lapse_penalty: float = 0.2

    # Intervals (days)
    relearn_interval: int = 1
    first_interval: int = 1
    second_interval: int = 6

    # Difficulty
    min_difficulty: int = 0
    max_difficulty: int = 5
    default_difficulty: int = 0
    streak_quality: int = 4

    # Progress classification
    learned_threshold: int = 3
    mastered_interval_days: int = 21

    def __post_init__(self) -> None:
        if not self.min_quality <= self.passing_threshold <= self.max_quality:
            raise InvalidInput("passing_threshold must lie on the quality scale",
                               field="passing_threshold")
        if self.minimum_ease_factor <= 0:
            raise InvalidInput("minimum_ease_factor must be positive",
                               field="minimum_ease_factor")
        if self.default_ease_factor < self.minimum_ease_factor:
            raise InvalidInput("default_ease_factor is below minimum_ease_factor",
                               field="default_ease_factor")
        if self.lapse_penalty < 0:
            raise InvalidInput("lapse_penalty must not be negative", field="lapse_penalty")
        if min(self.relearn_interval, self.first_interval, self.second_interval) < 1:
            raise InvalidInput("intervals must be at least one day", field="relearn_interval")
        if self.second_interval <= max(self.first_interval, self.relearn_interval):
            raise InvalidInput("second_interval must exceed first_interval and relearn_interval",
                               field="second_interval")
        if not self.min_difficulty <= self.default_difficulty <= self.max_difficulty:
            raise InvalidInput("default_difficulty is outside the difficulty range",
                               field="default_difficulty")

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "SchedulerConfig":
        """Build a config, overriding defaults with ``WORDMASTER_<FIELD>`` variables."""
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            cast = float if f.type in ("float", float) else int
            try:
                overrides[f.name] = cast(raw)
            except ValueError as exc:
                raise InvalidInput(f"{ENV_PREFIX}{f.name.upper()}={raw!r} is not a valid {cast.__name__}",
                                   field=f.name) from exc
        if overrides:
            log.info("Scheduler config overrides: %s", overrides)
        return cls(**overrides)


DEFAULT_CONFIG = SchedulerConfig()


def _default_database_url() -> str:
    data_dir = Path(os.getenv(ENV_PREFIX + "DATA_DIR", BASE_DIR / "data"))
    return f"sqlite:///{data_dir / 'wordmaster.db'}"


@dataclass
class Settings:
    """Application settings for the collaborators around the core."""

    database_url: str = field(default_factory=_default_database_url)
    database_echo: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)


def load_settings(env_file: Optional[str | Path] = None) -> Settings:
    """Read settings from the environment, after loading *env_file* if given."""
    if env_file is not None:
        load_dotenv(env_file)
    return Settings(
        database_url=os.getenv(ENV_PREFIX + "DATABASE_URL") or _default_database_url(),
        database_echo=os.getenv(ENV_PREFIX + "DATABASE_ECHO", "false").lower() == "true",
        log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO"),
        log_file=os.getenv(ENV_PREFIX + "LOG_FILE"),
        scheduler=SchedulerConfig.from_env(),
    )
