"""Supabase REST client for the hosted reading_progress table."""

import logging
from datetime import datetime, timezone
from typing import Any

import requests

from .models import CompletedReading

logger = logging.getLogger(__name__)

TABLE = "reading_progress"


class SupabaseClient:
    """Client for completed-reading records stored in Supabase (PostgREST)."""

    def __init__(self, url: str, api_key: str, timeout: int = 10):
        self.base_url = f"{url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "ReadBibleReadingPlan/1.0",
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            }
        )
        adapter = requests.adapters.HTTPAdapter(
            pool_connections=10,
            pool_maxsize=10,
            max_retries=1,
        )
        self.session.mount("https://", adapter)

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/{TABLE}"

    def fetch_records(self, user_id: str) -> list[CompletedReading] | None:
        """Fetch all progress rows for a user, newest first."""
        params = {
            "select": "reading_id,is_completed,completed_at,created_at",
            "user_id": f"eq.{user_id}",
            "order": "created_at.desc",
        }
        try:
            response = self.session.get(
                self.table_url, params=params, timeout=self.timeout
            )
            response.raise_for_status()
            rows: list[dict[str, Any]] = response.json()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch reading progress for {user_id}: {e}")
            return None

        return [
            CompletedReading(
                user_id=user_id,
                reading_id=row["reading_id"],
                is_completed=bool(row.get("is_completed")),
                completed_at=row.get("completed_at"),
                created_at=row.get("created_at"),
            )
            for row in rows
            if row.get("reading_id")
        ]

    def fetch_completed(self, user_id: str) -> set[str] | None:
        """Fetch the reading ids a user has completed."""
        records = self.fetch_records(user_id)
        if records is None:
            return None
        return {r.reading_id for r in records if r.is_completed}

    def mark_complete(
        self, user_id: str, reading_id: str, now: datetime | None = None
    ) -> bool:
        """Upsert a completed row for (user_id, reading_id)."""
        if now is None:
            now = datetime.now(timezone.utc)
        payload = {
            "user_id": user_id,
            "reading_id": reading_id,
            "is_completed": True,
            "completed_at": now.isoformat(),
        }
        try:
            response = self.session.post(
                self.table_url,
                params={"on_conflict": "user_id,reading_id"},
                json=payload,
                headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to mark {reading_id} for {user_id}: {e}")
            return False
        logger.info(f"Marked {reading_id} complete for {user_id}")
        return True

    def mark_incomplete(self, user_id: str, reading_id: str) -> bool:
        """Delete the row for (user_id, reading_id)."""
        params = {"user_id": f"eq.{user_id}", "reading_id": f"eq.{reading_id}"}
        try:
            response = self.session.delete(
                self.table_url, params=params, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to remove {reading_id} for {user_id}: {e}")
            return False
        logger.info(f"Removed {reading_id} for {user_id}")
        return True

    def toggle_reading(self, user_id: str, reading_id: str) -> bool | None:
        """Flip a reading's completion. Returns the new state, None on failure."""
        completed = self.fetch_completed(user_id)
        if completed is None:
            return None
        if reading_id in completed:
            return False if self.mark_incomplete(user_id, reading_id) else None
        return True if self.mark_complete(user_id, reading_id) else None
