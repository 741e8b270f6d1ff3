"""Simulation wrapper used by the command-line driver

Turns settings plus a list of address tokens (or a named scenario) into
a sequence of accesses and forwards them to the cache simulator.
"""
from typing import List, Optional, Sequence, Union

from cachesim.core.cache import Cache
from cachesim.core.simulator import CacheSimulator
from cachesim.simulation.trace import parse_address

SCENARIOS = ('Matrix Traversal', 'Sequential', 'Strided')


class Simulation:
    """Runs address sequences against one cache built from `settings`.

    `settings` needs `capacity`, `block_size` and `associativity`
    attributes; `strict` and `match_contents` are optional. The cache is
    built on the first run and reused afterwards, so state and counters
    carry over between runs.
    """

    def __init__(self, settings):
        self.settings = settings
        self.sim: Optional[CacheSimulator] = None

    @property
    def cache(self) -> Optional[Cache]:
        return self.sim.cache if self.sim is not None else None

    def _create_cache(self):
        # Only create a cache if one does not already exist.
        if self.sim is not None:
            return
        s = self.settings
        cache = Cache(
            int(s.capacity),
            int(s.block_size),
            int(s.associativity),
            strict=getattr(s, 'strict', True),
            match_contents=getattr(s, 'match_contents', False),
        )
        self.sim = CacheSimulator(cache)

    def run_simulation(self, items: Optional[Sequence[Union[int, str]]] = None,
                       scenario: str = 'Matrix Traversal', num_passes: int = 1) -> List[dict]:
        """Run `items` (or the scenario when items is None) `num_passes` times.

        Items that are not valid addresses (bad tokens, negative integers)
        are reported as {'error', 'input'} entries without touching the
        cache, and the run continues.
        """
        self._create_cache()
        if items is None:
            items = self.generate_sequence(scenario)

        results = []
        for p in range(num_passes):
            for idx, it in enumerate(items):
                try:
                    addr = it if isinstance(it, int) else parse_address(it)
                    self.sim.load_sequence([addr])
                    info = self.sim.step()
                except ValueError as e:
                    results.append({'error': str(e), 'input': it, '_pass': p, '_idx': idx})
                    continue
                info['_pass'] = p
                info['_idx'] = idx
                results.append(info)
        return results

    def generate_sequence(self, name: str) -> List[int]:
        block_size = int(self.settings.block_size)
        if name == 'Matrix Traversal':
            # row-major walk over a 10x10 matrix of 4-byte words
            N = 10
            return [(i * N + j) * 4 for i in range(N) for j in range(N)]
        elif name == 'Sequential':
            return [i * 4 for i in range(64)]
        elif name == 'Strided':
            # one access per line, twice over
            return [i * block_size for i in range(16)] * 2
        raise ValueError(f"unknown scenario {name!r}; choose from {', '.join(SCENARIOS)}")
