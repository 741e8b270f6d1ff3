"""Text reports for a cache run.

Only read accessors of the Cache are used here; the output format is the
one existing coursework traces were checked against.
"""
from typing import List

from cachesim.core.cache import Cache
from cachesim.data.stats_export import format_rate


def format_configuration(cache: Cache) -> str:
    cfg = cache.configuration()
    return "\n".join([
        f"Capacity {cfg['capacity']}",
        f"Block size {cfg['block_size']}",
        f"Associativity {cfg['associativity']}",
        f"Num Sets {cfg['num_sets']}",
    ])


def format_contents(cache: Cache) -> str:
    lines: List[str] = []
    for si, ways in enumerate(cache.dump_contents()):
        lines.append(f"****** SET {si}******")
        for way in ways:
            lines.append(f"Index {way['index']}: tag {way['tag']} valid {int(way['valid'])} lru {way['recency']}")
        lines.append("*****************")
    return "\n".join(lines)


def format_statistics(cache: Cache) -> str:
    stats = cache.statistics()
    return "\n".join([
        f"ACCESSES {stats['accesses']}",
        f"HITS {stats['hits']}",
        f"MISSES {stats['misses']}",
        f"HIT RATE {format_rate(stats['hit_rate'])}",
    ])
