#!/usr/bin/env python3
"""
Pattern Name Generator
======================
Generates names from short patterns in a single left-to-right pass.

Pattern syntax:
- token characters (s, v, V, c, B, C, i, m, M, D, d, t, T by default) are
  replaced by a random entry from the token table
- any character without table entries is emitted literally
- ( ... )  literal group: characters inside are emitted as-is
- < ... >  token group: characters inside are substituted, as at top level
- |        separates alternatives inside a group; exactly one is kept
- !        capitalizes the first character of the next component

Examples:
    "s(dim)"         -> a syllable followed by "dim"
    "!(foo|bar)"     -> "Foo" or "Bar"
    "<c|v|>"         -> a consonant, a vowel, or nothing
    "<(C!i)|(v!M)>"  -> either of two literal groups

Alternatives are chosen with reservoir sampling: the n-th alternative of a
group replaces the current choice with probability 1/n, so no pre-pass is
needed to count them. Replacing rolls the output back to the point where the
group started. Text inside an alternative that is not (or no longer) chosen
is still parsed, so nested brackets keep the depth balanced, but emits
nothing and consumes no random draws.

Usage:
    from namegen.generator import generate, Generator

    result = generate("!ss(dim)", seed=42)
    if result.ok:
        print(result.name)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .rng import XorShift32
from .tokens import TokenTable

logger = logging.getLogger(__name__)

# Frames on the stack, including the implicit top-level frame.
MAX_DEPTH = 32

LITERAL_OPEN = '('
LITERAL_CLOSE = ')'
GROUP_OPEN = '<'
GROUP_CLOSE = '>'
SEPARATOR = '|'
CAPITALIZE = '!'


# =============================================================================
# Status and Errors
# =============================================================================

class Status(Enum):
    """Outcome of a generation call."""
    SUCCESS = "success"
    NESTING_TOO_DEEP = "nesting_too_deep"
    UNBALANCED_GROUP = "unbalanced_group"
    EMPTY_TOKEN = "empty_token"


class PatternError(Exception):
    """Base class for errors that abort generation."""
    status = None

    def __init__(self, message: str, position: int = -1):
        self.position = position
        super().__init__(message)


class NestingTooDeep(PatternError):
    """Pattern nests groups deeper than the supported maximum."""
    status = Status.NESTING_TOO_DEEP


class UnbalancedGroup(PatternError):
    """Closer without a matching opener, or an opener never closed."""
    status = Status.UNBALANCED_GROUP


class EmptyToken(PatternError):
    """The selected candidate string was empty."""
    status = Status.EMPTY_TOKEN


@dataclass
class GenerationResult:
    """Result of one generate() call. name is "" unless status is SUCCESS."""
    name: str
    status: Status
    pattern: str = ""
    seed: int = 0
    next_seed: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


# =============================================================================
# Interpreter
# =============================================================================

class Mode(Enum):
    """How ordinary characters are treated inside a frame."""
    SUBSTITUTE = "substitute"
    LITERAL = "literal"


@dataclass
class Frame:
    """Per-depth interpreter state."""
    mode: Mode
    reset: int = 0              # output length to roll back to
    alternatives: int = 1       # alternatives seen so far
    capitalize: bool = False    # pending capitalization at group entry
    skip: bool = False          # current alternative is not emitting


@dataclass
class _Interpreter:
    tokens: TokenTable
    rng: XorShift32
    max_depth: int = MAX_DEPTH
    output: List[str] = field(default_factory=list)
    capitalize: bool = False

    def run(self, pattern: str) -> str:
        stack = [Frame(mode=Mode.SUBSTITUTE)]

        for pos, c in enumerate(pattern):
            frame = stack[-1]

            if c == LITERAL_OPEN or c == GROUP_OPEN:
                if len(stack) >= self.max_depth:
                    raise NestingTooDeep(
                        f"nesting exceeds {self.max_depth - 1} levels at position {pos}", pos)
                stack.append(Frame(
                    mode=Mode.LITERAL if c == LITERAL_OPEN else Mode.SUBSTITUTE,
                    reset=len(self.output),
                    capitalize=self.capitalize,
                    skip=frame.skip,
                ))

            elif c == LITERAL_CLOSE or c == GROUP_CLOSE:
                expected = Mode.LITERAL if c == LITERAL_CLOSE else Mode.SUBSTITUTE
                if len(stack) == 1:
                    raise UnbalancedGroup(f"unmatched {c!r} at position {pos}", pos)
                if frame.mode is not expected:
                    raise UnbalancedGroup(f"mismatched {c!r} at position {pos}", pos)
                stack.pop()

            elif c == SEPARATOR:
                parent_skip = stack[-2].skip if len(stack) > 1 else False
                if not parent_skip:
                    frame.alternatives += 1
                    if self.rng.accept(frame.alternatives):
                        del self.output[frame.reset:]
                        frame.skip = False
                        self.capitalize = frame.capitalize
                    else:
                        frame.skip = True

            elif c == CAPITALIZE:
                self.capitalize = True

            else:
                if not frame.skip:
                    if frame.mode is Mode.LITERAL:
                        self._emit(c)
                    else:
                        self._substitute(c, pos)
                self.capitalize = False

        if len(stack) != 1:
            raise UnbalancedGroup(f"{len(stack) - 1} unclosed group(s) at end of pattern", len(pattern))

        return ''.join(self.output)

    def _emit(self, text: str):
        if self.capitalize and text:
            self.output.append(text[0].upper())
            self.output.extend(text[1:])
        else:
            self.output.extend(text)
        self.capitalize = False

    def _substitute(self, key: str, pos: int):
        candidates = self.tokens.lookup(key)
        if not candidates:
            self._emit(key)
            return
        token = candidates[self.rng.below(len(candidates))]
        if not token:
            raise EmptyToken(f"empty candidate for token {key!r} at position {pos}", pos)
        self._emit(token)


# =============================================================================
# Public API
# =============================================================================

def generate(pattern: str, seed: int, tokens: Optional[TokenTable] = None,
             max_depth: int = MAX_DEPTH) -> GenerationResult:
    """
    Generate a name from a pattern.

    Parameters
    ----------
    pattern : str
        Pattern string (see module docstring)
    seed : int
        Non-negative seed; the same seed, pattern and table always give the
        same result
    tokens : TokenTable, optional
        Table to read from. Defaults to the built-in lists. Only read.
    max_depth : int
        Maximum number of frames, counting the top level

    Returns
    -------
    GenerationResult
        name and status; name is empty on failure. next_seed is the
        generator state afterwards, usable as the seed of a following call.
    """
    if tokens is None:
        tokens = TokenTable.defaults()

    rng = XorShift32(seed)
    interpreter = _Interpreter(tokens=tokens, rng=rng, max_depth=max_depth)

    try:
        name = interpreter.run(pattern)
    except PatternError as e:
        logger.debug(f"Pattern {pattern!r} failed with seed {seed}: {e}")
        return GenerationResult(
            name="",
            status=e.status,
            pattern=pattern,
            seed=seed,
            next_seed=rng.state,
            error=str(e),
        )

    return GenerationResult(
        name=name,
        status=Status.SUCCESS,
        pattern=pattern,
        seed=seed,
        next_seed=rng.state,
    )


class Generator:
    """
    Pattern generator bound to one token table.

    Usage:
        gen = Generator()
        print(gen.generate("!ss", seed=7).name)
        for result in gen.generate_many("<c|v>(ar)", count=5, seed=1):
            print(result.name)
    """

    def __init__(self, tokens: TokenTable = None, max_depth: int = MAX_DEPTH):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.tokens = tokens if tokens is not None else TokenTable.defaults()
        self.max_depth = max_depth

    def generate(self, pattern: str, seed: int) -> GenerationResult:
        return generate(pattern, seed, tokens=self.tokens, max_depth=self.max_depth)

    def generate_or_raise(self, pattern: str, seed: int) -> str:
        """Like generate(), but raise the PatternError instead of returning a status."""
        rng = XorShift32(seed)
        return _Interpreter(tokens=self.tokens, rng=rng, max_depth=self.max_depth).run(pattern)

    def generate_many(self, pattern: str, count: int, seed: int) -> List[GenerationResult]:
        """
        Generate count names, each seeded with the previous call's next_seed.

        Stops early at the first failure (the failing result is included),
        since every later call would fail the same way.
        """
        results = []
        for _ in range(count):
            result = self.generate(pattern, seed)
            results.append(result)
            if not result.ok:
                break
            seed = result.next_seed
        return results

    def validate(self, pattern: str) -> Status:
        """
        Structural check of a pattern.

        Brackets are checked with every token treated as a literal, so only
        NESTING_TOO_DEEP or UNBALANCED_GROUP can be reported.
        """
        return generate(pattern, 0, tokens=TokenTable(), max_depth=self.max_depth).status
