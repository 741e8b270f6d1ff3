"""CacheSimulator coordinates cache accesses and statistics.
Feeds addresses into the core Cache and keeps a hit-rate history.
"""
from typing import Callable, Iterable, List, Optional
from .cache import Cache


class CacheSimulator:
    def __init__(self, cache: Cache):
        self.cache = cache
        self.sequence: List[int] = []
        self.index = 0
        self.hit_rate_history: List[float] = []

    def reset(self):
        # rewind the sequence pointer and clear cache contents and counters
        self.index = 0
        self.hit_rate_history = []
        self.cache.reset()

    def load_sequence(self, addresses: Iterable[int]):
        self.sequence = list(addresses)
        self.index = 0
        # step() walks the sequence by advancing self.index

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def step(self) -> Optional[dict]:
        if not self.has_next():
            return None
        address = self.sequence[self.index]
        self.index += 1

        hit, set_index, way_index, tag, evicted = self.cache.add_access(address)
        stats = self.cache.statistics()
        self.hit_rate_history.append(stats['hit_rate'])

        return {
            'address': address,
            'hit': hit,
            'set_index': set_index,
            'way_index': way_index,
            'tag': tag,
            'stats': stats,
            'evicted': evicted,
        }

    def run_all(self, callback: Optional[Callable[[dict], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)
