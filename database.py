"""
Database Manager for PocketCalc
Key-value SQLite store used to persist history and the theme preference
"""
import logging
import sqlite3
from contextlib import closing
from datetime import datetime

import config

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        with closing(self.get_connection()) as conn:
            cursor = conn.cursor()

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')

            conn.commit()

    def load(self, key):
        """Return the stored value for key, or None"""
        try:
            with closing(self.get_connection()) as conn:
                cursor = conn.cursor()
                cursor.execute('SELECT value FROM settings WHERE key = ?', (key,))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error("Failed to load %r: %s", key, e)
            return None
        return row[0] if row else None

    def save(self, key, value):
        """Store value under key; failures are logged, not raised"""
        updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        try:
            with closing(self.get_connection()) as conn:
                cursor = conn.cursor()
                cursor.execute('''
                    INSERT INTO settings (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                ''', (key, value, updated_at))
                conn.commit()
        except sqlite3.Error as e:
            logger.error("Failed to save %r: %s", key, e)
            return False
        return True

    def delete(self, key):
        """Remove key from the store"""
        try:
            with closing(self.get_connection()) as conn:
                cursor = conn.cursor()
                cursor.execute('DELETE FROM settings WHERE key = ?', (key,))
                conn.commit()
        except sqlite3.Error as e:
            logger.error("Failed to delete %r: %s", key, e)
            return False
        return True
