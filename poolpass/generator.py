"""
poolpass.generator
Character pool construction and CSPRNG-backed password sampling.
"""

import os
import struct
from dataclasses import dataclass
from typing import List

from loguru import logger

from .charsets import ALPHABETS, AMBIGUOUS, CATEGORY_ORDER, Category


MIN_LENGTH = 4
MAX_LENGTH = 32
DEFAULT_LENGTH = 16

_UINT32_RANGE = 2 ** 32


class PoolPassError(Exception):
    """Base class for poolpass errors."""


class EmptyPoolError(PoolPassError, ValueError):
    def __init__(self, message: str = "No characters available: enable at least one character set"):
        super().__init__(message)


class RandomSourceUnavailable(PoolPassError, RuntimeError):
    pass


class SecureRandomSource:
    """
    Uniform unsigned 32-bit integers from the operating system CSPRNG.
    Holds no state, so one instance can be shared between threads.
    """

    def fill(self, n: int) -> List[int]:
        if n <= 0:
            return []
        try:
            raw = os.urandom(4 * n)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceUnavailable("Secure random source is unavailable") from e
        return list(struct.unpack(f"<{n}I", raw))


_default_source = SecureRandomSource()


@dataclass(frozen=True)
class GeneratorConfig:
    categories: Category = Category.ALL
    exclude_ambiguous: bool = False
    length: int = DEFAULT_LENGTH

    def __post_init__(self):
        if not isinstance(self.categories, Category):
            raise ValueError("categories must be a Category flag")
        check_length(self.length)


def check_length(length: int) -> None:
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValueError("length must be an integer")
    if length < MIN_LENGTH or length > MAX_LENGTH:
        raise ValueError(f"length must be between {MIN_LENGTH} and {MAX_LENGTH}")


def build_pool(categories: Category, exclude_ambiguous: bool = False) -> str:
    """
    Concatenate the alphabets of the enabled categories in fixed order and,
    if requested, strip every ambiguous character from the result.

    Characters shared by several categories are kept once per category, so
    the pool (and the sampling weight of each category) follows alphabet
    sizes. The result may be empty.
    """
    pool = "".join(ALPHABETS[c] for c in CATEGORY_ORDER if c in categories)
    if exclude_ambiguous:
        pool = "".join(ch for ch in pool if ch not in AMBIGUOUS)
    logger.debug("Built pool of {} characters (exclude_ambiguous={})", len(pool), exclude_ambiguous)
    return pool


def _draw_indices(n_pool: int, length: int, source, unbiased: bool) -> List[int]:
    if not unbiased:
        # modulo reduction: slight bias toward low indices when n_pool does not divide 2**32
        return [r % n_pool for r in source.fill(length)]

    limit = _UINT32_RANGE - (_UINT32_RANGE % n_pool)
    indices: List[int] = []
    while len(indices) < length:
        for r in source.fill(length - len(indices)):
            if r < limit:
                indices.append(r % n_pool)
    return indices


def sample(pool: str, length: int, source=None, unbiased: bool = False) -> str:
    """
    Draw `length` characters uniformly by index from `pool`.

    `source` is any object with a `fill(n)` method returning n unsigned
    32-bit integers; it defaults to the OS CSPRNG. With `unbiased=True`
    draws that would skew the modulo reduction are rejected and redrawn.

    Raises EmptyPoolError for an empty pool and ValueError for a length
    outside [MIN_LENGTH, MAX_LENGTH].
    """
    if not pool:
        raise EmptyPoolError()
    check_length(length)
    if source is None:
        source = _default_source

    indices = _draw_indices(len(pool), length, source, unbiased)
    logger.debug("Sampled {} characters from pool of {} (unbiased={})", length, len(pool), unbiased)
    return "".join(pool[i] for i in indices)


def generate_password(config: GeneratorConfig, source=None, unbiased: bool = False) -> str:
    pool = build_pool(config.categories, config.exclude_ambiguous)
    return sample(pool, config.length, source=source, unbiased=unbiased)


def generate(
    length: int = DEFAULT_LENGTH,
    use_upper: bool = True,
    use_lower: bool = True,
    use_digits: bool = True,
    use_symbols: bool = True,
    exclude_ambiguous: bool = False,
    source=None,
    unbiased: bool = False,
) -> str:
    """
    Generate a cryptographically secure password.
    """
    categories = Category(0)
    if use_upper:
        categories |= Category.UPPERCASE
    if use_lower:
        categories |= Category.LOWERCASE
    if use_digits:
        categories |= Category.NUMBERS
    if use_symbols:
        categories |= Category.SYMBOLS
    config = GeneratorConfig(categories=categories, exclude_ambiguous=exclude_ambiguous, length=length)
    return generate_password(config, source=source, unbiased=unbiased)
