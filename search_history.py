"""
Persistent log of recent search queries.

Kept beside the ball animation but independent from it: a JSON file holding
the newest queries first, without case-insensitive duplicates, capped at a
fixed number of entries.
"""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from sim_config import HISTORY_LIMIT

logger = logging.getLogger("falling_balls.history")

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class SearchEntry:
    query: str
    timestamp: str


class SearchHistory:

    def __init__(self, path: Union[str, Path], limit: int = HISTORY_LIMIT,
                 clock: Callable[[], datetime] = datetime.now):
        self.path = Path(path)
        self.limit = max(1, limit)
        self.clock = clock
        self.entries: List[SearchEntry] = []
        self.load()

    def __len__(self):
        return len(self.entries)

    def load(self) -> List[SearchEntry]:
        """Read the log from disk; missing or corrupt files give an empty log."""
        self.entries = []
        if not self.path.exists():
            return self.entries
        try:
            with self.path.open('r', encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Could not read search history %s: %s", self.path, exc)
            return self.entries
        if not isinstance(data, list):
            logger.warning("Search history %s is not a list, ignoring it", self.path)
            return self.entries

        for item in data:
            if isinstance(item, dict) and isinstance(item.get('query'), str):
                self.entries.append(SearchEntry(item['query'], str(item.get('timestamp', ''))))
        del self.entries[self.limit:]
        return self.entries

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as fh:
            json.dump([asdict(entry) for entry in self.entries], fh, indent=2)

    def add(self, query: str) -> Optional[SearchEntry]:
        """Record ``query`` as the newest entry, dropping an older duplicate."""
        query = query.strip()
        if not query:
            return None
        entry = SearchEntry(query, self.clock().strftime(TIMESTAMP_FORMAT))
        folded = query.casefold()
        self.entries = [e for e in self.entries if e.query.casefold() != folded]
        self.entries.insert(0, entry)
        del self.entries[self.limit:]
        self.save()
        return entry

    def delete(self, index: int) -> bool:
        if not 0 <= index < len(self.entries):
            return False
        del self.entries[index]
        self.save()
        return True

    def clear(self):
        self.entries = []
        if self.path.exists():
            self.path.unlink()
        logger.info("Search history cleared")
