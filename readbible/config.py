"""Configuration management for the ReadBible reading plan."""

import logging
import os
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path

from .models import PLAN_DAYS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Immutable application configuration."""

    user_id: str | None = None
    plan_start: date | None = None  # None = January 1 of the target year
    log_level: str = "INFO"
    state_dir: Path | None = None
    supabase_url: str | None = None
    supabase_key: str | None = None
    request_timeout: int = 30

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        plan_start_raw = os.getenv("READBIBLE_PLAN_START")
        plan_start = None
        if plan_start_raw:
            try:
                plan_start = date.fromisoformat(plan_start_raw.strip())
            except ValueError as e:
                raise ValueError(
                    f"READBIBLE_PLAN_START must be YYYY-MM-DD, got {plan_start_raw!r}"
                ) from e

        timeout_raw = os.getenv("REQUEST_TIMEOUT", "30")
        try:
            timeout = int(timeout_raw)
        except ValueError as e:
            raise ValueError(
                f"REQUEST_TIMEOUT must be an integer, got {timeout_raw!r}"
            ) from e

        state_dir_raw = os.getenv("READBIBLE_STATE_DIR")

        config = cls(
            user_id=os.getenv("READBIBLE_USER_ID") or None,
            plan_start=plan_start,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            state_dir=Path(state_dir_raw) if state_dir_raw else None,
            supabase_url=(os.getenv("SUPABASE_URL") or "").rstrip("/") or None,
            supabase_key=os.getenv("SUPABASE_KEY") or None,
            request_timeout=timeout,
        )

        if config.remote_enabled:
            logger.info("Remote progress store: ENABLED")
        else:
            logger.info(
                "Remote progress store: DISABLED "
                "(set SUPABASE_URL and SUPABASE_KEY to enable)"
            )

        return config

    @property
    def remote_enabled(self) -> bool:
        """Whether the hosted progress store is configured."""
        return bool(self.supabase_url and self.supabase_key)

    def require_user(self) -> str:
        """Return the configured user id or fail."""
        if not self.user_id:
            raise ValueError("READBIBLE_USER_ID environment variable is required")
        return self.user_id

    def resolve_plan_start(self, today: date | None = None) -> date:
        """Start date of the active plan.

        Defaults to January 1 of today's year. A plan covers PLAN_DAYS days,
        so when today falls past the end of that window (December 31 of a
        leap year) the start moves forward to keep today as the last day.
        """
        if self.plan_start is not None:
            return self.plan_start
        if today is None:
            today = date.today()
        start = date(today.year, 1, 1)
        if (today - start).days >= PLAN_DAYS:
            start = today - timedelta(days=PLAN_DAYS - 1)
        return start

    def setup_logging(self) -> None:
        """Configure application logging."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper()),
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def get_data_dir() -> Path:
    """Get the bundled data directory."""
    return Path(__file__).parent / "data"


def get_state_dir() -> Path:
    """Get the default directory for local progress state."""
    return get_project_root() / ".state"
