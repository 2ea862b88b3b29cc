#!/usr/bin/env python3
"""
Token Table
===========
Maps single pattern characters to the replacement strings they expand to.

The built-in lists live in tokens/default.yaml. Tables can also be loaded
from external JSON or YAML documents of the form:

    {"s": ["ach", "ban"], "v": ["a", "e", "i", "o", "u"]}

Usage:
    from namegen.tokens import TokenTable

    table = TokenTable.defaults()
    table.set('x', ['foo', 'bar'])
    table.load('my_tokens.json', merge=True)
    table.lookup('s')   # -> ('ach', 'ack', ...)
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

TOKENS_DIR = Path(__file__).parent
DEFAULT_TOKENS_PATH = TOKENS_DIR / 'default.yaml'

YAML_SUFFIXES = ('.yaml', '.yml')

# Human-readable meaning of each built-in key
CATEGORIES = {
    's': "generic syllable",
    'v': "vowel",
    'V': "vowel or vowel combination",
    'c': "consonant",
    'B': "consonant or cluster suitable for beginning a word",
    'C': "consonant or cluster suitable anywhere in a word",
    'i': "insult",
    'm': "mushy name",
    'M': "mushy name ending",
    'D': "consonant suited for a stupid person's name",
    'd': "syllable suited for a stupid person's name",
    't': "title prefix phrase",
    'T': "title suffix phrase",
}


class LoadError(ValueError):
    """External token data could not be read or decoded."""

    def __init__(self, locator, reason: str):
        self.locator = str(locator)
        self.reason = reason
        super().__init__(f"Cannot load tokens from {self.locator}: {reason}")


# =============================================================================
# Decoding
# =============================================================================

def _check_key(key) -> str:
    if not isinstance(key, str) or len(key) != 1:
        raise ValueError(f"Token key must be a single character, got {key!r}")
    return key


def _check_candidates(key: str, candidates) -> Tuple[str, ...]:
    if isinstance(candidates, str):
        raise TypeError(f"Candidates for {key!r} must be a list of strings, not a string")
    values = tuple(candidates)
    for value in values:
        if not isinstance(value, str):
            raise TypeError(f"Candidates for {key!r} must be strings, got {value!r}")
    return values


def decode_tokens(data, locator='<data>') -> Dict[str, Tuple[str, ...]]:
    """
    Validate a decoded document and convert it to table entries.

    Raises
    ------
    LoadError
        If the root is not a mapping, a key is not one character, a value is
        not a list of strings, or no entries remain.
    """
    if not isinstance(data, dict):
        raise LoadError(locator, f"root must be an object, got {type(data).__name__}")

    entries = {}
    for key, values in data.items():
        if not isinstance(key, str) or len(key) != 1:
            raise LoadError(locator, f"key {key!r} is not a single character")
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise LoadError(locator, f"value for {key!r} must be an array of strings")
        if values:
            entries[key] = tuple(values)

    if not entries:
        raise LoadError(locator, "no token entries found")
    return entries


def read_token_file(locator) -> Dict[str, Tuple[str, ...]]:
    """Read and decode a JSON or YAML token file."""
    path = Path(locator).expanduser()
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise LoadError(locator, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise LoadError(locator, f"not valid UTF-8 text ({e.reason} at byte {e.start})") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LoadError(locator, f"malformed content ({e})") from e

    return decode_tokens(data, locator)


@lru_cache(maxsize=1)
def load_default_tokens() -> Mapping[str, Tuple[str, ...]]:
    """Built-in token lists. Cached and shared, so returned as a read-only view."""
    return MappingProxyType(read_token_file(DEFAULT_TOKENS_PATH))


# =============================================================================
# Token Table
# =============================================================================

class TokenTable:
    """
    Mapping from a single character to its candidate replacement strings.

    A key with no candidates is the same as a missing key: lookup() returns
    an empty tuple and the generator emits the character literally.

    The table is not locked. Do not mutate it while generate() calls are
    using it; build a new table (copy() then load) and swap it in instead.
    """

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None):
        self._tokens: Dict[str, Tuple[str, ...]] = {}
        if entries:
            self.set_many(entries)

    @classmethod
    def defaults(cls) -> 'TokenTable':
        """New table populated with the built-in lists."""
        table = cls()
        table._tokens = dict(load_default_tokens())
        return table

    @classmethod
    def from_file(cls, locator) -> 'TokenTable':
        """New table populated only from an external file."""
        table = cls()
        table.load(locator)
        return table

    # --- Queries ---

    def lookup(self, key: str) -> Tuple[str, ...]:
        """Candidates for key, or () if it has none."""
        return self._tokens.get(key, ())

    def keys(self):
        return self._tokens.keys()

    def to_dict(self) -> Dict[str, list]:
        return {key: list(values) for key, values in self._tokens.items()}

    def copy(self) -> 'TokenTable':
        table = TokenTable()
        table._tokens = dict(self._tokens)
        return table

    def __contains__(self, key) -> bool:
        return key in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenTable(keys={''.join(sorted(self._tokens))!r})"

    # --- Mutation ---

    def set(self, key: str, candidates: Iterable[str]) -> None:
        """Replace the candidate list for one key. An empty list removes it."""
        key = _check_key(key)
        values = _check_candidates(key, candidates)
        if values:
            self._tokens[key] = values
        else:
            self._tokens.pop(key, None)

    def set_many(self, entries: Mapping[str, Iterable[str]]) -> None:
        """Apply set() for every entry. Nothing changes if any entry is invalid."""
        staged = {}
        for key, candidates in entries.items():
            key = _check_key(key)
            staged[key] = _check_candidates(key, candidates)
        for key, values in staged.items():
            self.set(key, values)

    def load(self, locator, merge: bool = False) -> None:
        """
        Load entries from an external JSON or YAML file.

        Parameters
        ----------
        locator : str or Path
            File to read. `.yaml`/`.yml` are parsed as YAML, anything else
            as JSON.
        merge : bool
            If True, overlay the loaded keys on the current content;
            otherwise replace the content entirely.

        Raises
        ------
        LoadError
            If the file is unreadable, malformed, not an object or empty.
            The table is left unchanged.
        """
        try:
            entries = read_token_file(locator)
        except LoadError as e:
            logger.warning(f"Token load rejected: {e}")
            raise
        if merge:
            self._tokens.update(entries)
        else:
            self._tokens = dict(entries)
        logger.debug(f"Loaded {len(entries)} token keys from {locator} (merge={merge})")

    load_from_external_source = load
