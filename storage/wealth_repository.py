"""
Wealth Repository

Durable storage for maker wealth snapshots. One row per (maker, chain, token) per
snapshot; rows are append-only.

SqliteWealthRepository writes to a local SQLite file. Each insert commits on its own,
so rows written before a failure stay written.
"""

import asyncio
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from core.logging import get_logger
from core.schemas import MakerWealthRow


class WealthRepository(ABC):
    """Destination for persisted wealth rows."""

    @abstractmethod
    async def insert(self, row: MakerWealthRow) -> None:
        """Write one row. Errors propagate to the caller."""
        ...


class SqliteWealthRepository(WealthRepository):
    """
    SQLite-backed wealth repository.

    Example:
        >>> repo = SqliteWealthRepository("data/maker_wealth.db")
        >>> repo.init_db()
        >>> await repo.insert(MakerWealthRow(maker_address="0xabc", chain_id=1,
        ...                                  token_address="", balance="1.5", decimals=18))
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self._logger = get_logger(__name__)

    def init_db(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with sqlite3.connect(self.db_path) as con:
            cur = con.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS maker_wealth (
                  id INTEGER PRIMARY KEY AUTOINCREMENT,
                  maker_address TEXT NOT NULL,
                  chain_id INTEGER NOT NULL,
                  token_address TEXT NOT NULL,
                  balance TEXT,
                  decimals INTEGER NOT NULL,
                  created_at TEXT NOT NULL
                )
                """
            )
            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_maker_wealth_maker_ts ON maker_wealth(maker_address, created_at)"
            )
            con.commit()

    def _insert(self, row: MakerWealthRow) -> None:
        with sqlite3.connect(self.db_path) as con:
            con.execute(
                """
                INSERT INTO maker_wealth (maker_address, chain_id, token_address, balance, decimals, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    row.maker_address,
                    row.chain_id,
                    row.token_address,
                    row.balance,
                    row.decimals,
                    row.created_at.isoformat(),
                ),
            )
            con.commit()

    async def insert(self, row: MakerWealthRow) -> None:
        await asyncio.to_thread(self._insert, row)
        self._logger.debug(f"Saved wealth row: {row.maker_address} chain={row.chain_id} token={row.token_address or 'native'}")

    def list_rows(self, maker_address: Optional[str] = None) -> List[MakerWealthRow]:
        """Read rows back, oldest first (optionally for one maker)."""
        query = "SELECT maker_address, chain_id, token_address, balance, decimals, created_at FROM maker_wealth"
        params = ()
        if maker_address:
            query += " WHERE maker_address = ?"
            params = (maker_address,)
        query += " ORDER BY id"

        with sqlite3.connect(self.db_path) as con:
            rows = con.execute(query, params).fetchall()

        return [
            MakerWealthRow(
                maker_address=r[0],
                chain_id=r[1],
                token_address=r[2],
                balance=r[3],
                decimals=r[4],
                created_at=r[5],
            )
            for r in rows
        ]
