#!/usr/bin/env python3
"""
namegen - Pattern-Driven Name Generator
=======================================

Generates fantasy names, titles and similar short strings from compact
patterns and a numeric seed.

Quick Start
-----------
    from namegen import NameGen

    ng = NameGen()

    # One name from a pattern
    result = ng.generate("!ss(dim)", seed=42)
    print(result.name)

    # Several names, seed threaded from one call to the next
    names = ng.generate_many("!ssV'!i", count=5, seed=7)

    # Custom tokens
    ng.load_tokens("tokens.json", merge=True)

Modules
-------
    namegen.generator - Pattern interpreter
    namegen.tokens    - Token table and loaders
    namegen.rng       - Seeded random number generator
    namegen.config    - Configuration and pattern presets

CLI Usage
---------
    python -m namegen generate --preset fantasy -n 10
    python -m namegen generate "<c|v>(ar)" --seed 1 --table
    python -m namegen check "<(C!i)|(v!M)>"
    python -m namegen presets
"""

__version__ = "0.2.0"
__author__ = "namegen"

import logging
from typing import List, Optional

from . import config
from . import generator
from . import rng
from . import tokens

from .config import (
    Config,
    get_config,
    load_env,
    PATTERN_PRESETS,
    get_pattern,
    list_presets,
)
from .generator import (
    MAX_DEPTH,
    Generator,
    GenerationResult,
    Status,
    PatternError,
    NestingTooDeep,
    UnbalancedGroup,
    EmptyToken,
    generate as generate_pattern,
)
from .rng import XorShift32, random_seed
from .tokens import CATEGORIES, LoadError, TokenTable

logger = logging.getLogger(__name__)


# =============================================================================
# Main Interface
# =============================================================================

class NameGen:
    """
    Main interface for name generation.

    Owns one token table (built-in lists, plus the configured token file if
    any) and a Generator bound to it.

    Example:
        ng = NameGen()
        print(ng.generate("!BVs", seed=3).name)
    """

    def __init__(self, tokens: TokenTable = None, cfg: Config = None):
        """
        Initialize.

        Args:
            tokens: Token table to use. Defaults to the built-in lists with
                the configured token file applied.
            cfg: Configuration. Defaults to get_config().
        """
        self._config = cfg or get_config()

        if tokens is None:
            tokens = TokenTable.defaults()
            if self._config.has_tokens_file:
                tokens.load(self._config.tokens_path, merge=self._config.tokens_merge)

        self._generator = Generator(tokens=tokens, max_depth=self._config.max_depth)

    @property
    def tokens(self) -> TokenTable:
        return self._generator.tokens

    @property
    def config(self) -> Config:
        return self._config

    def _resolve(self, pattern: Optional[str]) -> str:
        return pattern if pattern is not None else self._config.default_pattern

    def generate(self, pattern: str = None, seed: int = None) -> GenerationResult:
        """
        Generate one name.

        Args:
            pattern: Pattern string (default: configured pattern)
            seed: Seed (default: fresh random seed)
        """
        if seed is None:
            seed = random_seed()
        return self._generator.generate(self._resolve(pattern), seed)

    def generate_preset(self, preset: str, seed: int = None) -> GenerationResult:
        """Generate one name from a named preset (see PATTERN_PRESETS)."""
        return self.generate(get_pattern(preset), seed=seed)

    def generate_many(self, pattern: str = None, count: int = None,
                      seed: int = None) -> List[GenerationResult]:
        """Generate several names; see Generator.generate_many."""
        if seed is None:
            seed = random_seed()
        if count is None:
            count = self._config.default_count
        return self._generator.generate_many(self._resolve(pattern), count, seed)

    def validate(self, pattern: str) -> Status:
        """Structural status of a pattern."""
        return self._generator.validate(pattern)

    def load_tokens(self, locator, merge: bool = False):
        """
        Load an external token file.

        The new content is built on a copy and swapped in, so a failed load
        (LoadError) leaves the current table untouched.
        """
        table = self.tokens.copy()
        table.load(locator, merge=merge)
        self._generator.tokens = table
        logger.debug(f"Token table now has {len(table)} keys")

    def set_tokens(self, key: str, candidates: List[str]):
        """Replace the candidates for one key (copy-then-swap)."""
        table = self.tokens.copy()
        table.set(key, candidates)
        self._generator.tokens = table


# =============================================================================
# Convenience Functions
# =============================================================================

def generate(pattern: str, seed: int = None, tokens: TokenTable = None) -> GenerationResult:
    """Quick generation with the built-in tokens (or the given table)."""
    if seed is None:
        seed = random_seed()
    return generate_pattern(pattern, seed, tokens=tokens)


__all__ = [
    '__version__',
    'NameGen',
    'generate',
    'generate_pattern',
    # Generator
    'Generator',
    'GenerationResult',
    'Status',
    'MAX_DEPTH',
    'PatternError',
    'NestingTooDeep',
    'UnbalancedGroup',
    'EmptyToken',
    # Tokens
    'TokenTable',
    'LoadError',
    'CATEGORIES',
    # RNG
    'XorShift32',
    'random_seed',
    # Config
    'Config',
    'get_config',
    'load_env',
    'PATTERN_PRESETS',
    'get_pattern',
    'list_presets',
]
