"""
Settings repository - operations for app settings.
"""

from .connection import DatabaseConnection
from .converters import to_timestamp, utc_now
from .models import DEFAULT_SETTINGS

_UPSERT = """INSERT INTO settings (key, value, updated_at)
             VALUES (?, ?, ?)
             ON CONFLICT(key) DO UPDATE SET
             value = excluded.value, updated_at = excluded.updated_at"""


class SettingsRepository:
    """Repository for application settings."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a setting value."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row and row["value"] is not None else default

    def set(self, key: str, value: str):
        """Set a setting value."""
        with self._db.conn() as conn:
            conn.execute(_UPSERT, (key, value, to_timestamp(utc_now())))

    def set_many(self, values: dict[str, str]):
        """Upsert several settings in one transaction."""
        now = to_timestamp(utc_now())
        with self._db.conn() as conn:
            conn.executemany(_UPSERT, [(key, value, now) for key, value in values.items()])

    def get_all(self) -> dict[str, str]:
        """Get all settings as a dictionary."""
        with self._db.conn() as conn:
            rows = conn.execute("SELECT key, value FROM settings").fetchall()
            return {row["key"]: row["value"] for row in rows}

    def reset(self):
        """Drop every setting and restore the defaults in one transaction."""
        now = to_timestamp(utc_now())
        with self._db.conn() as conn:
            conn.execute("DELETE FROM settings")
            conn.executemany(
                "INSERT INTO settings (key, value, updated_at) VALUES (?, ?, ?)",
                [(key, value, now) for key, value in DEFAULT_SETTINGS.items()]
            )
