import pytest
from cachesim.core.cache import Cache
from cachesim.core.config import ConfigurationError, is_power_of_two, validate_configuration


def test_power_of_two():
    assert [n for n in range(0, 70) if is_power_of_two(n)] == [1, 2, 4, 8, 16, 32, 64]


def test_valid_configuration_geometry():
    cfg = validate_configuration(1024, 64, 1)
    assert cfg.num_blocks == 16
    assert cfg.num_sets == 16
    cfg = validate_configuration(128, 16, 2)
    assert (cfg.num_blocks, cfg.num_sets) == (8, 4)


@pytest.mark.parametrize('capacity,block_size,assoc,needle', [
    (96, 16, 2, 'capacity must be a power of two'),
    (1024, 24, 1, 'block_size must be a power of two'),
    (1024, 64, 3, 'not divisible'),
    (64, 128, 1, 'not divisible'),
    (0, 64, 1, 'capacity must be positive'),
    (1024, 64, 0, 'associativity must be positive'),
    (1024, 64, -2, 'associativity must be positive'),
    (1024.0, 64, 1, 'capacity must be an integer'),
])
def test_invalid_configurations(capacity, block_size, assoc, needle):
    with pytest.raises(ConfigurationError) as exc:
        validate_configuration(capacity, block_size, assoc)
    assert needle in str(exc.value)
    assert exc.value.associativity == assoc


def test_legacy_mode_only_requires_even():
    # 96 is even but not a power of two
    c = Cache(96, 16, 2, strict=False)
    assert c.num_sets == 3
    assert c.num_sets * c.associativity * c.block_size == 96
    c = Cache(6, 2, strict=False)
    assert c.num_sets == 3
    with pytest.raises(ConfigurationError, match='capacity must be even'):
        validate_configuration(63, 1, 1, strict=False)
    with pytest.raises(ConfigurationError, match='block_size must be even'):
        validate_configuration(64, 1, 1, strict=False)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        Cache(100, 10)
