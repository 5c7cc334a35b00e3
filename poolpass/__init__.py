"""PoolPass: character-pool password generator with a strength heuristic."""

from loguru import logger

from .charsets import AMBIGUOUS, ALPHABETS, Category
from .evaluator import evaluate, score_password, strength_label
from .generator import (
    EmptyPoolError,
    GeneratorConfig,
    PoolPassError,
    RandomSourceUnavailable,
    SecureRandomSource,
    build_pool,
    generate,
    generate_password,
    sample,
)

__version__ = "0.1.0"

# library users opt in with logger.enable("poolpass")
logger.disable("poolpass")
