#!/usr/bin/env python3
"""
Password Generation
===================
Batch password generation on top of a probability model, with the
retry-with-another-seed policy that the core builder leaves to callers.
"""

from __future__ import annotations

import logging
import random
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional

from letter_corpus import default_observations, read_observations
from pronounceable_password import (
    InvalidLengthError,
    NoSuccessorAvailable,
    ProbabilityModel,
    construct,
)
from settings import get_setting, resolve_path

logger = logging.getLogger(__name__)

# Stack frames kept free for callers of the recursive builder
RECURSION_HEADROOM = 200


def max_recursive_length() -> int:
    """Longest password the recursive builder can produce safely"""
    return sys.getrecursionlimit() - RECURSION_HEADROOM


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class GeneratorConfig:
    """Configuration for password generation."""
    strategy: Optional[str] = None          # "indexed" or "linear"
    password_length: Optional[int] = None
    sample_limit: Optional[int] = None      # Commonness window size
    max_attempts: Optional[int] = None      # Seeds tried per unseeded password
    seed_letters: Optional[str] = None
    recursive: bool = False                 # Use the recursive builder

    def __post_init__(self):
        cfg = get_setting("generator", {}) or {}
        if self.strategy is None:
            self.strategy = cfg.get("strategy")
        if self.password_length is None:
            self.password_length = cfg.get("password_length")
        if self.sample_limit is None:
            self.sample_limit = cfg.get("sample_limit")
        if self.max_attempts is None:
            self.max_attempts = cfg.get("max_attempts")
        if self.seed_letters is None:
            self.seed_letters = cfg.get("seed_letters")

        missing = [
            name for name, value in (
                ("strategy", self.strategy),
                ("password_length", self.password_length),
                ("sample_limit", self.sample_limit),
                ("max_attempts", self.max_attempts),
                ("seed_letters", self.seed_letters),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"generator settings missing in app.yaml: {', '.join(missing)}")

        if self.password_length < 1:
            raise InvalidLengthError(
                f"password_length must be at least 1, got {self.password_length}"
            )
        if self.recursive and self.password_length > max_recursive_length():
            raise InvalidLengthError(
                f"password_length {self.password_length} is too deep for the recursive "
                f"builder (max {max_recursive_length()}); use the iterative builder"
            )
        if self.sample_limit < 1:
            raise ValueError(f"sample_limit must be at least 1, got {self.sample_limit}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")


# =============================================================================
# Corpus loading
# =============================================================================

def load_observations(path: Optional[str] = None) -> list:
    """
    Load corpus observations.

    Uses `path`, else `corpus.path` from app.yaml, else the built-in words.
    """
    if path is None:
        path = get_setting("corpus.path")
    if path is None:
        logger.debug("No corpus file configured, using built-in word corpus")
        return default_observations()

    corpus_path = resolve_path(path)
    return list(read_observations(
        corpus_path,
        pair_column=get_setting("corpus.pair_column", "letter pair"),
        count_column=get_setting("corpus.count_column", "count"),
    ))


# =============================================================================
# Generator
# =============================================================================

class PasswordGenerator:
    """Generates pronounceable passwords from a shared probability model"""

    def __init__(self,
                 model: ProbabilityModel,
                 config: Optional[GeneratorConfig] = None,
                 rng: Optional[random.Random] = None):
        self.model = model
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random()

    @classmethod
    def from_corpus(cls,
                    path: Optional[str] = None,
                    config: Optional[GeneratorConfig] = None,
                    rng: Optional[random.Random] = None) -> 'PasswordGenerator':
        """Build a model from a corpus file (or the built-in corpus)."""
        config = config or GeneratorConfig()
        observations = load_observations(path)
        model = construct(observations, strategy=config.strategy, rng=rng)
        logger.debug(
            f"Built {config.strategy} model from {len(observations)} observations"
        )
        return cls(model, config=config, rng=rng)

    @classmethod
    def from_observations(cls,
                          observations: Iterable,
                          config: Optional[GeneratorConfig] = None,
                          rng: Optional[random.Random] = None) -> 'PasswordGenerator':
        config = config or GeneratorConfig()
        model = construct(observations, strategy=config.strategy, rng=rng)
        return cls(model, config=config, rng=rng)

    def _build(self, seed: str) -> str:
        if self.config.recursive:
            return self.model.recursive_build_password_from(
                seed, self.config.password_length, self.config.sample_limit, self.rng
            )
        return self.model.build_password_from(
            seed, self.config.password_length, self.config.sample_limit, self.rng
        )

    def candidate_seeds(self) -> List[str]:
        """Configured seed letters that the model can extend"""
        known = set(self.model.first_letters())
        seeds = [s for s in dict.fromkeys(self.config.seed_letters) if s in known]
        if not seeds:
            seeds = sorted(known)
        return seeds

    def generate(self, seed: Optional[str] = None) -> str:
        """
        Generate one password.

        An explicit seed is built exactly once and failures propagate.
        Without a seed, random seed letters are tried until one succeeds or
        `max_attempts` is reached.

        Raises:
            NoSuccessorAvailable: If every attempt got stuck
            ValueError: If the model has no letters at all
        """
        if seed is not None:
            return self._build(seed)

        seeds = self.candidate_seeds()
        if not seeds:
            raise ValueError("model has no letters to seed a password with")

        last_error = None
        for attempt in range(self.config.max_attempts):
            candidate = self.rng.choice(seeds)
            try:
                return self._build(candidate)
            except NoSuccessorAvailable as e:
                last_error = e
                logger.debug(
                    f"Retry {attempt + 1}/{self.config.max_attempts}: "
                    f"seed {candidate!r} stuck at {e.letter!r} after {e.partial!r}"
                )

        logger.warning(
            f"Gave up after {self.config.max_attempts} attempts; "
            f"last stall at {last_error.letter!r}"
        )
        raise last_error

    def generate_batch(self, count: int, seed: Optional[str] = None) -> List[str]:
        """Generate `count` passwords (duplicates are possible)."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.generate(seed) for _ in range(count)]


__all__ = [
    "GeneratorConfig",
    "PasswordGenerator",
    "load_observations",
    "max_recursive_length",
]
