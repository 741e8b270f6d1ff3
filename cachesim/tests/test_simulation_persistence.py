from cachesim.simulation.simulation import Simulation


class Settings:
    """Minimal settings object providing the attributes Simulation reads."""
    def __init__(self, capacity=128, block_size=16, associativity=2):
        self.capacity = capacity
        self.block_size = block_size
        self.associativity = associativity


def test_simulation_reuses_cache_and_accumulates_stats():
    sim = Simulation(Settings())

    # run once
    results1 = sim.run_simulation(items=[0, 64])
    assert sim.cache is not None
    core1 = sim.cache
    accesses1 = core1.accesses
    assert [r['hit'] for r in results1] == [False, False]

    # run again; cache should be reused and both lines are still present
    results2 = sim.run_simulation(items=[0, 64])
    assert sim.cache is core1, "Core cache should be the same instance across runs"
    assert sim.cache.accesses == accesses1 + 2
    assert [r['hit'] for r in results2] == [True, True]


def test_num_passes_repeats_sequence():
    sim = Simulation(Settings())
    results = sim.run_simulation(items=['0x0', '0x40', '0'], num_passes=2)
    assert len(results) == 6
    assert [r['_pass'] for r in results] == [0, 0, 0, 1, 1, 1]
    assert [r['hit'] for r in results] == [False, False, True, True, True, True]
    assert results[-1]['stats']['accesses'] == 6


def test_bad_token_is_reported_and_skipped():
    sim = Simulation(Settings())
    results = sim.run_simulation(items=['0', 'nope', '0'])
    assert 'error' in results[1]
    assert results[1]['input'] == 'nope'
    assert results[2]['hit'] is True
    assert sim.cache.accesses == 2


def test_settings_flags_reach_cache():
    s = Settings(capacity=96, block_size=16, associativity=2)
    s.strict = False
    s.match_contents = True
    sim = Simulation(s)
    sim.run_simulation(items=[4, 8])
    assert sim.cache.num_sets == 3
    assert sim.cache.match_contents is True
    assert sim.cache.hits == 1


def test_negative_integer_item_is_reported_and_skipped():
    sim = Simulation(Settings())
    results = sim.run_simulation(items=[0, -4, 0])
    assert len(results) == 3
    assert results[1]['input'] == -4
    assert 'non-negative' in results[1]['error']
    assert results[2]['hit'] is True
    # the rejected item never reached the counters or the history
    assert (sim.cache.accesses, sim.cache.hits, sim.cache.misses) == (2, 1, 1)
    assert sim.sim.hit_rate_history == [0.0, 0.5]


def test_string_and_integer_items_fail_alike():
    as_text = Simulation(Settings()).run_simulation(items=['0', '-4', '0'])
    as_int = Simulation(Settings()).run_simulation(items=[0, -4, 0])
    assert ['error' in r for r in as_text] == ['error' in r for r in as_int] == [False, True, False]
