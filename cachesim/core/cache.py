"""Core cache implementation

This file provides the set-associative cache model used by the simulator
and the text reports.
Behavior:
- Cache is composed of sets; each set has `associativity` ways.
  block_addr = address // block_size
  set_index = block_addr % num_sets
  tag = block_addr // num_sets
- add_access returns AccessResult(hit, set_index, way_index, tag, evicted)
- Replacement is LRU based on per-block recency counters (see
  replacement_policies.LRUReplacement).
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, NamedTuple, Optional, Tuple

from cachesim.core.config import CacheConfig, ConfigurationError, validate_configuration
from cachesim.core.replacement_policies import LRUReplacement
from cachesim.data.stats_export import Statistics

# value stored in the contents of a block that was never filled
EMPTY_WORD = -1


@dataclass
class CacheBlock:
    """container for a cache line (way).

    Fields:
    - tag: the tag stored in the line
    - valid: whether the line currently holds useful data
    - recency: -1 for never used, 0 for most recently used, larger is older
    - contents: simulated words, `block_size` consecutive values starting at
      the address that brought the line in
    - index: set index the line was loaded into
    """

    tag: int = 0
    valid: bool = False
    recency: int = -1
    contents: List[int] = field(default_factory=list)
    index: int = 0

    def fill(self, contents: List[int], tag: int, index: int) -> None:
        self.contents = contents
        self.valid = True
        self.tag = tag
        self.recency = 0
        self.index = index

    def clear(self, block_size: int) -> None:
        self.tag = 0
        self.valid = False
        self.recency = -1
        self.contents = [EMPTY_WORD] * block_size
        self.index = 0


class AccessResult(NamedTuple):
    hit: bool
    set_index: int
    way_index: int
    tag: int
    # copy of the line that was overwritten on a miss, if it held data
    evicted: Optional[CacheBlock] = None


class Cache:
    """Set-associative cache with LRU replacement.

    Building a Cache is the configuration step: invalid parameters raise
    ConfigurationError and no cache object is produced.

    strict: require powers of two (False only requires even sizes).
    match_contents: detect hits by looking for the raw address in the
        stored contents instead of comparing tags. Old traces were scored
        this way; for addresses that are not the first of their line it
        reports misses where a tag comparison reports hits.
    """

    def __init__(
        self,
        capacity: int,
        block_size: int,
        associativity: int = 1,
        strict: bool = True,
        match_contents: bool = False,
    ):
        self.config: CacheConfig = validate_configuration(capacity, block_size, associativity, strict=strict)
        self.capacity = self.config.capacity
        self.block_size = self.config.block_size
        self.associativity = self.config.associativity
        self.num_blocks = self.config.num_blocks
        self.num_sets = self.config.num_sets
        self.match_contents = match_contents
        self.policy = LRUReplacement()
        self._stats = Statistics()

        # allocate the sets matrix: num_sets x associativity
        self.sets: List[List[CacheBlock]] = []
        for _ in range(self.num_sets):
            row = []
            for _ in range(self.associativity):
                b = CacheBlock()
                b.clear(self.block_size)
                row.append(b)
            self.sets.append(row)

    # counters are read-only from the outside
    @property
    def accesses(self) -> int:
        return self._stats.accesses

    @property
    def hits(self) -> int:
        return self._stats.hits

    @property
    def misses(self) -> int:
        return self._stats.misses

    @property
    def hit_rate(self) -> Optional[float]:
        return self._stats.hit_rate

    def decode(self, address: int) -> Tuple[int, int, int]:
        """Decode address into (block_addr, set_index, tag)."""
        if address < 0:
            raise ValueError(f"address must be non-negative, got {address}")
        block_addr = address // self.block_size
        set_index = block_addr % self.num_sets
        tag = block_addr // self.num_sets
        return block_addr, set_index, tag

    def _find_hit(self, cache_set: List[CacheBlock], address: int, tag: int) -> Optional[int]:
        # wi = way-index
        for wi, block in enumerate(cache_set):
            if self.match_contents:
                found = address in block.contents
            else:
                found = block.valid and block.tag == tag
            if found:
                self.policy.access(cache_set, wi)
                return wi
        return None

    def add_access(self, address: int) -> AccessResult:
        """Feed one byte address to the cache.

        Runs decode, hit test, LRU aging and (on a miss) placement as one
        step and records the outcome in the counters.
        """
        address = int(address)
        _, set_index, tag = self.decode(address)
        cache_set = self.sets[set_index]

        hit_way = self._find_hit(cache_set, address, tag)
        self.policy.age(cache_set, hit_way, self.policy.has_space(cache_set))

        if hit_way is not None:
            self._stats.record_access(True)
            return AccessResult(True, set_index, hit_way, tag)

        victim_index = self.policy.evict(cache_set)
        victim = cache_set[victim_index]
        # make a copy of the evicted block
        evicted = replace(victim, contents=list(victim.contents)) if victim.valid else None
        victim.fill(list(range(address, address + self.block_size)), tag, set_index)
        self._stats.record_access(False)
        return AccessResult(False, set_index, victim_index, tag, evicted)

    def dump_contents(self) -> List[List[Dict[str, object]]]:
        """Snapshot of every set: one dict per way with index, tag (hex), valid, recency."""
        dump = []
        for si, cache_set in enumerate(self.sets):
            dump.append([
                {
                    'set': si,
                    'index': wi,
                    'tag': format(block.tag, 'x'),
                    'valid': block.valid,
                    'recency': block.recency,
                }
                for wi, block in enumerate(cache_set)
            ])
        return dump

    def statistics(self) -> Dict[str, object]:
        """Return accesses, hits, misses, hit_rate and miss_rate (rates are None before any access)."""
        return self._stats.as_dict()

    def configuration(self) -> Dict[str, int]:
        return {
            'capacity': self.capacity,
            'block_size': self.block_size,
            'associativity': self.associativity,
            'num_blocks': self.num_blocks,
            'num_sets': self.num_sets,
        }

    def reset(self):
        """Clear cache contents and counters."""
        for s in self.sets:
            for b in s:
                b.clear(self.block_size)
        self._stats.reset()


__all__ = ["AccessResult", "Cache", "CacheBlock", "ConfigurationError", "EMPTY_WORD"]
