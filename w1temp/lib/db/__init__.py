"""Async database operations for the w1temp logger.

This package provides async database operations using aiosqlite. Each
configured store path gets its own short-lived Database connection.
"""

from w1temp.lib.db.connection import Database as Database
from w1temp.lib.db.connection import load_template as load_template
from w1temp.lib.db.types import SQLParams as SQLParams
