"""
Maker Registry

Supplies the maker pair entries the aggregator shapes its requests from. The registry
is an external collaborator; this module provides the interface plus two sources:

- StaticMakerRegistry: entries held in memory (tests, embedding)
- JsonMakerRegistry: entries read from a JSON file on every call, so edits to the
  maker list take effect without a restart

JSON layout (a list of rows using the registry's camelCase keys):
    [
      {"makerAddress": "0xabc", "c1ID": 1, "c1Name": "mainnet", "c2ID": 3, "c2Name": "zksync",
       "t1Address": "0x0000000000000000000000000000000000000000",
       "t2Address": "0x0000000000000000000000000000000000000000",
       "tName": "ETH", "precision": 18}
    ]
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union

from core.logging import get_logger
from core.schemas import MakerPairEntry


class MakerRegistry(ABC):
    """Source of maker pair entries."""

    @abstractmethod
    async def get_maker_list(self) -> List[MakerPairEntry]:
        """Return every maker pair entry, in registry order."""
        ...

    async def get_maker_addresses(self) -> List[str]:
        """Distinct maker addresses, in first-seen order."""
        seen = {}
        for entry in await self.get_maker_list():
            seen.setdefault(entry.maker_address, None)
        return list(seen)


class StaticMakerRegistry(MakerRegistry):
    """In-memory registry."""

    def __init__(self, entries: Optional[Iterable[MakerPairEntry]] = None):
        self._entries: List[MakerPairEntry] = list(entries or [])

    async def get_maker_list(self) -> List[MakerPairEntry]:
        return list(self._entries)


class JsonMakerRegistry(MakerRegistry):
    """
    Registry backed by a JSON file.

    Raises (from get_maker_list):
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON list of valid entries
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._logger = get_logger(__name__)

    def _load(self) -> List[MakerPairEntry]:
        with self.path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)

        if not isinstance(raw, list):
            raise ValueError(f"Maker list {self.path} must be a JSON array")

        entries = [MakerPairEntry.model_validate(row) for row in raw]
        self._logger.debug(f"Loaded {len(entries)} maker entries from {self.path}")
        return entries

    async def get_maker_list(self) -> List[MakerPairEntry]:
        return await asyncio.to_thread(self._load)
