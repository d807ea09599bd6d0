"""
Settings service: structured view over the key/value settings store,
plus categories, statistics and the AI connection test.
"""

import logging
from typing import TYPE_CHECKING

from ..database import Database
from ..database.models import DEFAULT_SETTINGS
from ..exceptions import APIError

if TYPE_CHECKING:
    from ..summarizer import Summarizer

logger = logging.getLogger(__name__)

# Request field -> settings key
AI_SETTING_KEYS = {
    "provider": "ai_provider",
    "system_prompt": "ai_system_prompt",
    "max_tokens": "ai_max_tokens",
    "temperature": "ai_temperature",
    "model": "ai_model",
}
GENERAL_SETTING_KEYS = {
    "refresh_interval": "refresh_interval",
    "max_articles_per_feed": "max_articles_per_feed",
}

# Changing these rebuilds the provider stack
PROVIDER_KEYS = {"ai_provider", "ai_model"}


def _int(value: str | None, default: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return int(default)


def _float(value: str | None, default: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


class SettingsService:
    """Service for settings, statistics and AI diagnostics."""

    def __init__(self, db: Database, summarizer: "Summarizer | None" = None):
        self.db = db
        self.summarizer = summarizer

    def get_settings(self) -> dict:
        """Settings grouped as ``{ai: {...}, refresh_interval, max_articles_per_feed}``."""
        values = self.db.get_all_settings()

        ai = {
            "provider": values.get("ai_provider") or DEFAULT_SETTINGS["ai_provider"],
            "system_prompt": values.get("ai_system_prompt") or DEFAULT_SETTINGS["ai_system_prompt"],
            "max_tokens": _int(values.get("ai_max_tokens"), DEFAULT_SETTINGS["ai_max_tokens"]),
            "temperature": _float(values.get("ai_temperature"), DEFAULT_SETTINGS["ai_temperature"]),
        }
        if values.get("ai_model"):
            ai["model"] = values["ai_model"]

        return {
            "ai": ai,
            "refresh_interval": _int(values.get("refresh_interval"), DEFAULT_SETTINGS["refresh_interval"]),
            "max_articles_per_feed": _int(
                values.get("max_articles_per_feed"), DEFAULT_SETTINGS["max_articles_per_feed"]
            ),
        }

    def update_settings(self, ai: dict | None, general: dict) -> list[str]:
        """
        Store every provided value in one transaction.

        Returns:
            The settings keys that were written

        Raises:
            HTTPException: 400 if nothing was provided
        """
        updates: dict[str, str] = {}
        for field, value in (ai or {}).items():
            if field in AI_SETTING_KEYS and value is not None:
                updates[AI_SETTING_KEYS[field]] = str(value)
        for field, value in general.items():
            if field in GENERAL_SETTING_KEYS and value is not None:
                updates[GENERAL_SETTING_KEYS[field]] = str(value)

        if not updates:
            raise APIError(400, "No updates provided", "At least one setting must be updated")

        self.db.set_settings(updates)
        logger.info(f"Updated settings: {', '.join(sorted(updates))}")

        if PROVIDER_KEYS & updates.keys():
            self._reload_ai()
        return list(updates)

    def reset_settings(self):
        self.db.reset_settings()
        logger.info("Settings reset to defaults")
        self._reload_ai()

    def _reload_ai(self):
        from ..ai import configure_ai
        configure_ai(self.db)

    async def test_ai(self) -> dict:
        """Run a short summarization through the configured provider."""
        if not self.summarizer:
            return {
                "success": False,
                "message": "AI connection failed: no LLM provider configured",
            }
        return await self.summarizer.test_connection()

    def get_categories(self) -> list[str]:
        return self.db.get_categories()

    def get_stats(self) -> dict:
        return {
            "totals": self.db.get_totals(),
            "categories": self.db.get_category_counts(),
            "activity": {"articles_last_24_hours": self.db.count_articles_since(24)},
        }
