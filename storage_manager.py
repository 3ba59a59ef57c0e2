"""
Storage Manager for PocketCalc
Hydrates and persists calculation history and the theme preference
"""
import json
import logging

import config

logger = logging.getLogger(__name__)


class StorageManager:
    def __init__(self, db, history_key=config.HISTORY_KEY):
        self.db = db
        self.history_key = history_key

    def load_history(self):
        """Load stored history records (most recent first)"""
        raw = self.db.load(self.history_key)
        if not raw:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable stored history: %s", e)
            return []
        if not isinstance(records, list):
            logger.warning("Ignoring stored history of type %s", type(records).__name__)
            return []
        return records

    def save_history(self, records):
        """Persist history records"""
        return self.db.save(self.history_key, json.dumps(records))

    def clear_history(self):
        """Remove stored history"""
        return self.db.delete(self.history_key)

    def get_theme(self):
        """Get the saved theme, 'light' or 'dark'"""
        theme = self.db.load(config.THEME_KEY)
        return theme if theme in config.THEMES else config.DEFAULT_THEME

    def set_theme(self, theme):
        """Save the theme preference"""
        if theme not in config.THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self.db.save(config.THEME_KEY, theme)
        return theme

    def toggle_theme(self):
        """Switch between light and dark mode and return the new theme"""
        return self.set_theme("light" if self.get_theme() == "dark" else "dark")
