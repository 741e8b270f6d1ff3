"""Cache configuration checks.

A configuration is (capacity, block_size, associativity), all in bytes
except associativity (ways per set). The derived geometry is:

  num_blocks = capacity // block_size
  num_sets   = num_blocks // associativity

and a configuration is only accepted when that arithmetic is exact.
"""
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when capacity/block size/associativity cannot form a cache."""

    def __init__(self, message: str, capacity=None, block_size=None, associativity=None):
        super().__init__(message)
        self.capacity = capacity
        self.block_size = block_size
        self.associativity = associativity


@dataclass(frozen=True)
class CacheConfig:
    capacity: int
    block_size: int
    associativity: int = 1

    @property
    def num_blocks(self) -> int:
        return self.capacity // self.block_size

    @property
    def num_sets(self) -> int:
        return self.num_blocks // self.associativity


def is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


def validate_configuration(capacity: int, block_size: int, associativity: int = 1, strict: bool = True) -> CacheConfig:
    """Check a configuration and return it as a CacheConfig.

    With strict=True capacity and block size must be powers of two. With
    strict=False they only have to be even, which is what older traces
    were produced with (6 passes there, for example).
    """
    def fail(msg):
        raise ConfigurationError(msg, capacity=capacity, block_size=block_size, associativity=associativity)

    for name, value in (('capacity', capacity), ('block_size', block_size), ('associativity', associativity)):
        if isinstance(value, bool) or not isinstance(value, int):
            fail(f"{name} must be an integer, got {type(value).__name__}")
        if value <= 0:
            fail(f"{name} must be positive, got {value}")

    if strict:
        if not is_power_of_two(capacity):
            fail(f"capacity must be a power of two, got {capacity}")
        if not is_power_of_two(block_size):
            fail(f"block_size must be a power of two, got {block_size}")
    else:
        if capacity % 2 != 0:
            fail(f"capacity must be even, got {capacity}")
        if block_size % 2 != 0:
            fail(f"block_size must be even, got {block_size}")

    if capacity % (block_size * associativity) != 0:
        fail(f"capacity {capacity} is not divisible by block_size * associativity ({block_size} * {associativity})")

    return CacheConfig(capacity=capacity, block_size=block_size, associativity=associativity)


__all__ = ["ConfigurationError", "CacheConfig", "is_power_of_two", "validate_configuration"]
