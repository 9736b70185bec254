"""Persist a run's samples into the w1temp table of a SQLite store.

The table is expected to exist already (see sql/init_w1temp_table.sql).
Each row is committed on its own; a row that fails is reported and the
remaining rows are still written.
"""

import sqlite3

from w1temp.lib.db import Database, load_template
from w1temp.lib.exceptions import StoreOpenError
from w1temp.logging import get_logger
from w1temp.onewire.models import Run

logger = get_logger("onewire.persistence")


async def persist(
    run: Run, store_path: str, *, timeout_sec: float | None = None
) -> int:
    """Insert one row per sample of the run into the store at store_path.

    Args:
        run: The samples to write.
        store_path: SQLite file, created if it does not exist.
        timeout_sec: Busy timeout while another writer holds the lock.

    Returns:
        Number of rows inserted.

    Raises:
        StoreOpenError: If the store cannot be opened.
    """
    sql = load_template("insert_w1temp.sql")
    db = Database(store_path, timeout_sec=timeout_sec)

    logger.info("Loading store %s", store_path)
    try:
        await db.connect()
    except sqlite3.Error as e:
        raise StoreOpenError(store_path, e) from e

    inserted = 0
    try:
        for sample in run.samples:
            params = sample.as_row()
            try:
                await db.execute(sql, params)
            except sqlite3.Error as e:
                logger.error(
                    "Query <%s> with %s failed on %s: %s",
                    sql,
                    params,
                    store_path,
                    e,
                )
                continue
            inserted += 1
    finally:
        await db.close()

    logger.info(
        "Wrote %d/%d rows to %s", inserted, len(run.samples), store_path
    )
    return inserted
