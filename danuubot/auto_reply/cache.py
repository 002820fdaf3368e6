"""
Recent message cache for anti-delete.

Keeps the text of the latest messages keyed by message id so a revoke
notification can be answered with the deleted body:
- LRU eviction when max size reached
- Hit/miss statistics
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class CachedMessage:
    """A remembered message body."""
    message_id: str
    chat_id: str
    sender_id: str
    text: str
    cached_at: datetime = field(default_factory=datetime.now)


@dataclass
class CacheStats:
    """Cache statistics."""
    total_hits: int = 0
    total_misses: int = 0
    total_evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.total_hits + self.total_misses
        if total == 0:
            return 0.0
        return self.total_hits / total

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_hits": self.total_hits,
            "total_misses": self.total_misses,
            "hit_rate": f"{self.hit_rate:.1%}",
            "total_evictions": self.total_evictions,
        }


class MessageCache:
    """
    Bounded LRU store of message bodies.

    A max_size of 0 disables caching; anti-delete then only notifies.
    """

    def __init__(self, max_size: int = 500):
        self.max_size = max_size
        self._cache: OrderedDict[str, CachedMessage] = OrderedDict()
        self._stats = CacheStats()

    def remember(self, message_id: str, chat_id: str, sender_id: str, text: str) -> None:
        """Store a message body, evicting the oldest entry when full."""
        if self.max_size <= 0 or not message_id or not text:
            return

        if message_id in self._cache:
            self._cache.move_to_end(message_id)

        self._cache[message_id] = CachedMessage(
            message_id=message_id,
            chat_id=chat_id,
            sender_id=sender_id,
            text=text,
        )

        while len(self._cache) > self.max_size:
            self._cache.popitem(last=False)
            self._stats.total_evictions += 1

    def get(self, message_id: str, chat_id: str | None = None) -> CachedMessage | None:
        """
        Look up a message body by id.

        When chat_id is given, an entry remembered in another chat is a miss.
        """
        entry = self._cache.get(message_id)
        if entry is None or (chat_id is not None and entry.chat_id != chat_id):
            self._stats.total_misses += 1
            return None

        self._cache.move_to_end(message_id)
        self._stats.total_hits += 1
        return entry

    def pop(self, message_id: str, chat_id: str | None = None) -> CachedMessage | None:
        """Remove and return a message body."""
        entry = self.get(message_id, chat_id)
        if entry is not None:
            del self._cache[message_id]
        return entry

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, message_id: str) -> bool:
        return message_id in self._cache

    def get_stats(self) -> dict[str, Any]:
        stats = self._stats.to_dict()
        stats["total_entries"] = len(self._cache)
        stats["max_size"] = self.max_size
        return stats
