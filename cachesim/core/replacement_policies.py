"""LRU replacement driven by per-block recency counters.

The policy keeps no state of its own: every block carries a `recency`
counter and the policy only reads and bumps those counters, so the cache
grid stays the single source of truth.

Counter meaning:
- -1: slot never used
-  0: most recently used
- >0: older (larger is older)

API (methods):
- access(cache_set, way): mark `way` as most recently used
- age(cache_set, touched): bump recency of the other occupied blocks
- evict(cache_set): choose the destination way for a new block
"""

from typing import Optional, Sequence


class LRUReplacement:
    """Recency-counter LRU for one cache set."""

    @staticmethod
    def has_space(cache_set: Sequence) -> bool:
        """True when at least one way in the set holds no data."""
        return any(not block.valid for block in cache_set)

    def access(self, cache_set: Sequence, way: int) -> None:
        cache_set[way].recency = 0

    def age(self, cache_set: Sequence, touched: Optional[int], has_space: bool) -> None:
        """Age the blocks around `touched` (None on a miss).

        While the set is still filling every occupied block gets older.
        Once it is full only blocks sitting at recency 0 are pushed back,
        which keeps counters from growing without bound.
        """
        for wi, block in enumerate(cache_set):
            if wi == touched:
                continue
            if has_space:
                if block.recency != -1:
                    block.recency += 1
            elif block.recency == 0:
                block.recency += 1

    def evict(self, cache_set: Sequence) -> int:
        """Return the way a new block should go into.

        Empty ways are filled first; otherwise the oldest block is chosen,
        the lowest way winning on ties.
        """
        for wi, block in enumerate(cache_set):
            if block.recency == -1:
                return wi
        victim = 0
        for wi, block in enumerate(cache_set):
            if block.recency > cache_set[victim].recency:
                victim = wi
        return victim


__all__ = ["LRUReplacement"]
