#!/usr/bin/env python3
"""
Configuration Management
========================
Combines configs/app.yaml, a .env file and environment variables into a
Config record. Provides named pattern presets.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .settings import get_setting, resolve_path


# =============================================================================
# Pattern Presets
# =============================================================================
# Ready-made patterns, selectable by name (CLI: --preset NAME).

PATTERN_PRESETS = {
    "fantasy": {
        "pattern": "!ssV'!i",
        "description": "Two syllables, a vowel, an apostrophe and a capitalized insult",
    },
    "mushy": {
        "pattern": "v!M",
        "description": "Vowel followed by a capitalized mushy ending",
    },
    "dim": {
        "pattern": "c(dim)",
        "description": "Consonant followed by the literal 'dim'",
    },
    "insult": {
        "pattern": "C!i",
        "description": "Consonant cluster and a capitalized insult",
    },
    "either": {
        "pattern": "<(C!i)|(v!M)>",
        "description": "Either of two literal groups",
    },
    "maybe": {
        "pattern": "<C!i|v!M|>",
        "description": "Insult, mushy ending, or nothing",
    },
    "stupid": {
        "pattern": "!Dd",
        "description": "Silly consonant and syllable",
    },
    "pet": {
        "pattern": "!m<!M|>",
        "description": "Mushy name with an optional capitalized ending",
    },
    "titled": {
        "pattern": "!BVC<v|>s !T",
        "description": "Name followed by a title suffix",
    },
    "herald": {
        "pattern": "!t !BVs",
        "description": "Title prefix followed by a name",
    },
}


def get_pattern(preset: str) -> str:
    """
    Resolve a preset name to its pattern.

    Args:
        preset: A key of PATTERN_PRESETS

    Returns:
        The pattern string

    Raises:
        ValueError: If the preset name is not found
    """
    info = PATTERN_PRESETS.get(preset)
    if info is None:
        available = ', '.join(sorted(PATTERN_PRESETS.keys()))
        raise ValueError(
            f"Unknown preset '{preset}'. "
            f"Available presets: {available}"
        )
    return info["pattern"]


def list_presets() -> dict:
    """List all pattern presets with descriptions."""
    return {
        name: {
            "pattern": p["pattern"],
            "description": p["description"],
        }
        for name, p in PATTERN_PRESETS.items()
    }


# =============================================================================
# Application Configuration
# =============================================================================

@dataclass
class Config:
    """Application configuration"""
    tokens_path: Optional[Path] = None
    tokens_merge: bool = True
    max_depth: int = 32
    default_pattern: str = "!ssV'!i"
    default_count: int = 10

    @property
    def has_tokens_file(self) -> bool:
        return self.tokens_path is not None


def load_env(env_path: Path = None) -> dict:
    """Load environment variables from .env file."""
    if env_path is None:
        env_path = Path.cwd() / '.env'

    env_vars = {}
    if env_path.exists():
        for line in env_path.read_text().splitlines():
            line = line.strip()
            if '=' in line and not line.startswith('#'):
                key, value = line.split('=', 1)
                env_vars[key.strip()] = value.strip().strip('"\'')
    return env_vars


def _env(env: dict, key: str) -> Optional[str]:
    return os.environ.get(key) or env.get(key)


def get_config(env_path: Path = None) -> Config:
    """Build configuration; environment beats .env beats app.yaml."""
    env = load_env(env_path)

    tokens_path = None
    if _env(env, 'NAMEGEN_TOKENS'):
        tokens_path = resolve_path(_env(env, 'NAMEGEN_TOKENS'), base=Path.cwd())
    elif get_setting('tokens.path'):
        tokens_path = resolve_path(get_setting('tokens.path'))

    max_depth = _env(env, 'NAMEGEN_MAX_DEPTH') or get_setting('generator.max_depth', 32)
    pattern = _env(env, 'NAMEGEN_PATTERN') or get_setting('generator.default_pattern', "!ssV'!i")

    try:
        max_depth = int(max_depth)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid max depth: {max_depth!r}")
    if max_depth < 1:
        raise ValueError(f"Max depth must be at least 1, got {max_depth}")

    return Config(
        tokens_path=tokens_path,
        tokens_merge=bool(get_setting('tokens.merge', True)),
        max_depth=max_depth,
        default_pattern=pattern,
        default_count=int(get_setting('generator.default_count', 10)),
    )


# Singleton config
_config = None

def config() -> Config:
    """Get the singleton config instance."""
    global _config
    if _config is None:
        _config = get_config()
    return _config
