#!/usr/bin/env python3
"""
Pronounceable Password Generator
================================
Generates pronounceable passwords from a first-order Markov chain over
letter pairs. The chain is learned from a corpus of observed letter-pair
counts such as ("th", 1250), ("he", 980).

Two model strategies are provided:
- LinearScanModel: keeps raw observations, filters and sorts on every query
- IndexedModel: aggregates counts once and precomputes ranked successors

Both expose the same query contract and share the password builder.

Theory:
-------
For each letter, successors are ranked by observed count. A password grows
by sampling uniformly from the top `sample_limit` successors of its last
character (the "commonness window"). Small windows give very plausible,
repetitive output; larger windows trade plausibility for variety.
"""

import random
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional


# =============================================================================
# ERRORS
# =============================================================================

class PasswordModelError(Exception):
    """Base class for model and builder failures."""


class LetterNotFoundError(PasswordModelError, KeyError):
    """Letter has no entry in the model's successor table."""

    def __init__(self, letter: str):
        super().__init__(letter)
        self.letter = letter

    def __str__(self):
        return f"no successors recorded for {self.letter!r}"


class EmptyResultError(PasswordModelError, LookupError):
    """Successor list for a letter is empty."""

    def __init__(self, letter: str):
        super().__init__(f"no successors available for {letter!r}")
        self.letter = letter


class NoSuccessorAvailable(PasswordModelError):
    """
    Password builder cannot extend any further.

    Attributes:
        letter: The character that has no recorded successors
        partial: The password built before the stall
    """

    def __init__(self, letter: str, partial: str):
        super().__init__(
            f"cannot extend past {letter!r}; "
            f"built {len(partial)} character(s): {partial!r}"
        )
        self.letter = letter
        self.partial = partial


class InvalidLengthError(PasswordModelError, ValueError):
    """Requested password length is not usable."""


class InvalidSeedError(PasswordModelError, ValueError):
    """Seed is empty or not a string."""


# =============================================================================
# OBSERVATIONS
# =============================================================================

@dataclass(frozen=True)
class Observation:
    """A single letter-pair count from the training corpus"""
    first_letter: str
    second_letter: str
    count: int

    def __post_init__(self):
        for name in ('first_letter', 'second_letter'):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(f"{name} must be a single character, got {value!r}")
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")

    @property
    def pair(self) -> str:
        return self.first_letter + self.second_letter

    @classmethod
    def from_pair(cls, pair: str, count: int) -> 'Observation':
        """
        Build an observation from a two-character pair string.

        Raises:
            ValueError: If pair is not exactly two characters or count < 0
        """
        if not isinstance(pair, str) or len(pair) != 2:
            raise ValueError(f"letter pair must be two characters, got {pair!r}")
        return cls(pair[0], pair[1], int(count))


def _as_observation(record) -> Observation:
    """Accept Observation, (pair, count) or (first, second, count)."""
    if isinstance(record, Observation):
        return record
    if len(record) == 2:
        return Observation.from_pair(record[0], record[1])
    first, second, count = record
    return Observation(first, second, int(count))


# =============================================================================
# PROBABILITY MODELS
# =============================================================================

class ProbabilityModel(ABC):
    """
    Ranked successor lookup plus the shared password builder.

    Subclasses only decide how `possible_next_letters` is answered. Models
    are read-only after construction, so one instance can serve any number
    of callers.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random()

    @abstractmethod
    def possible_next_letters(self, letter: str) -> list[str]:
        """Successors of `letter`, most likely first (empty if none)"""

    def most_common_next_letter(self, letter: str) -> str:
        """The most probable next letter"""
        letters = self.possible_next_letters(letter)
        if not letters:
            raise EmptyResultError(letter)
        return letters[0]

    def common_next_letter(self,
                           letter: str,
                           sample_limit: int = 2,
                           rng: Optional[random.Random] = None) -> str:
        """
        Pick a letter uniformly from the top `sample_limit` successors.

        Args:
            letter: Current letter
            sample_limit: Size of the commonness window
            rng: Random source for this call (defaults to the model's)
        """
        if sample_limit < 1:
            raise ValueError(f"sample_limit must be at least 1, got {sample_limit}")
        window = self.possible_next_letters(letter)[:sample_limit]
        if not window:
            raise EmptyResultError(letter)
        return (rng or self._rng).choice(window)

    def _extend(self, password: str, sample_limit: int,
                rng: Optional[random.Random]) -> str:
        # Always extend from the last character
        last = password[-1]
        try:
            return password + self.common_next_letter(last, sample_limit, rng)
        except EmptyResultError as exc:
            raise NoSuccessorAvailable(last, password) from exc

    def build_password_from(self,
                            seed_letter: str,
                            password_length: int = 10,
                            sample_limit: int = 2,
                            rng: Optional[random.Random] = None) -> str:
        """
        Build a password by appending `password_length - 1` letters to the seed.

        A non-positive length returns the seed unchanged.

        Raises:
            InvalidSeedError: If the seed is empty
            NoSuccessorAvailable: If a letter along the way has no successors
        """
        _check_seed(seed_letter)
        password = seed_letter
        for _ in range(password_length - 1):
            password = self._extend(password, sample_limit, rng)
        return password

    def recursive_build_password_from(self,
                                      password: str,
                                      password_length: int = 10,
                                      sample_limit: int = 2,
                                      rng: Optional[random.Random] = None) -> str:
        """Recursive form of build_password_from; same letters for the same rng"""
        _check_seed(password)
        if password_length <= 1:
            return password
        return self.recursive_build_password_from(
            self._extend(password, sample_limit, rng),
            password_length - 1,
            sample_limit,
            rng,
        )

    @abstractmethod
    def first_letters(self) -> list[str]:
        """Letters that start at least one observed pair"""


class LinearScanModel(ProbabilityModel):
    """Keeps observations verbatim and scans them on every query"""

    def __init__(self, observations: Iterable = (),
                 rng: Optional[random.Random] = None):
        super().__init__(rng)
        self._observations = tuple(_as_observation(o) for o in observations)

    @property
    def observations(self) -> tuple[Observation, ...]:
        return self._observations

    def possible_next_letters(self, letter: str) -> list[str]:
        matches = [o for o in self._observations if o.first_letter == letter]
        # Stable sort keeps ingestion order among equal counts
        matches.sort(key=lambda o: o.count, reverse=True)
        return [o.second_letter for o in matches]

    def first_letters(self) -> list[str]:
        return list(dict.fromkeys(o.first_letter for o in self._observations))


class IndexedModel(ProbabilityModel):
    """Aggregates pair counts once and precomputes ranked successors"""

    def __init__(self, observations: Iterable = (),
                 rng: Optional[random.Random] = None):
        super().__init__(rng)
        counts = defaultdict(Counter)
        for obs in observations:
            obs = _as_observation(obs)
            counts[obs.first_letter][obs.second_letter] += obs.count

        self._counts = {letter: dict(table) for letter, table in counts.items()}
        # Counter preserves insertion order, so ties keep first appearance
        self._ranked = {
            letter: tuple(
                second for second, _ in
                sorted(table.items(), key=lambda item: item[1], reverse=True)
            )
            for letter, table in self._counts.items()
        }

    def possible_next_letters(self, letter: str) -> list[str]:
        return list(self._ranked.get(letter, ()))

    def successor_counts(self, letter: str) -> dict[str, int]:
        """
        Aggregated successor counts for `letter`.

        Raises:
            LetterNotFoundError: If `letter` never starts a pair
        """
        try:
            return dict(self._counts[letter])
        except KeyError:
            raise LetterNotFoundError(letter) from None

    def first_letters(self) -> list[str]:
        return list(self._ranked)


def _check_seed(seed) -> None:
    if not isinstance(seed, str) or not seed:
        raise InvalidSeedError(f"seed must be a non-empty string, got {seed!r}")


# =============================================================================
# MODULE-LEVEL API
# =============================================================================

MODEL_STRATEGIES = {
    'indexed': IndexedModel,
    'linear': LinearScanModel,
}


def construct(observations: Iterable,
              strategy: str = 'indexed',
              rng: Optional[random.Random] = None) -> ProbabilityModel:
    """
    Build a probability model from letter-pair observations.

    Args:
        observations: Observation objects, (pair, count) or (first, second, count)
        strategy: 'indexed' (precomputed) or 'linear' (scan per query)
        rng: Default random source for sampling
    """
    try:
        model_cls = MODEL_STRATEGIES[strategy]
    except KeyError:
        available = ', '.join(sorted(MODEL_STRATEGIES))
        raise ValueError(
            f"Unknown model strategy '{strategy}'. Available: {available}"
        ) from None
    return model_cls(observations, rng=rng)


def possible_next_letters(model: ProbabilityModel, letter: str) -> list[str]:
    return model.possible_next_letters(letter)


def most_common_next_letter(model: ProbabilityModel, letter: str) -> str:
    return model.most_common_next_letter(letter)


def common_next_letter(model: ProbabilityModel, letter: str,
                       sample_limit: int = 2,
                       rng: Optional[random.Random] = None) -> str:
    return model.common_next_letter(letter, sample_limit, rng)


def build_password_from(model: ProbabilityModel, seed: str,
                        length: int = 10, sample_limit: int = 2,
                        rng: Optional[random.Random] = None) -> str:
    return model.build_password_from(seed, length, sample_limit, rng)


def recursive_build_password_from(model: ProbabilityModel, seed: str,
                                  length: int = 10, sample_limit: int = 2,
                                  rng: Optional[random.Random] = None) -> str:
    return model.recursive_build_password_from(seed, length, sample_limit, rng)


__all__ = [
    'Observation',
    'ProbabilityModel',
    'LinearScanModel',
    'IndexedModel',
    'MODEL_STRATEGIES',
    'construct',
    'possible_next_letters',
    'most_common_next_letter',
    'common_next_letter',
    'build_password_from',
    'recursive_build_password_from',
    'PasswordModelError',
    'LetterNotFoundError',
    'EmptyResultError',
    'NoSuccessorAvailable',
    'InvalidLengthError',
    'InvalidSeedError',
]
