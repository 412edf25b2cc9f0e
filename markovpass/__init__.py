#!/usr/bin/env python3
"""
markovpass - Pronounceable Password Generator
=============================================

Generates pronounceable passwords from a first-order Markov chain over
letter pairs learned from a corpus of letter-pair counts.

Quick Start
-----------
    from markovpass import PasswordGenerator

    gen = PasswordGenerator.from_corpus()          # built-in word corpus
    gen.generate()
    gen.generate_batch(5, seed='q')

    # Or work with the model directly
    from markovpass import construct
    model = construct([("th", 10), ("he", 9)], strategy="linear")
    model.possible_next_letters("t")               # ['h']

Modules
-------
    pronounceable_password - Probability models and the password builder
    letter_corpus          - Corpus CSV reading/writing and pair counting
    markovpass.generator   - Batch generation with seed retry
    markovpass.cli         - Command-line interface

CLI Usage
---------
    python -m markovpass generate -n 5 -l 12
    python -m markovpass next t
"""

__version__ = "0.1.0"
__author__ = "markovpass"

import sys
from pathlib import Path

# Ensure parent directory is in path for imports
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from pronounceable_password import (
    Observation,
    ProbabilityModel,
    LinearScanModel,
    IndexedModel,
    construct,
    possible_next_letters,
    most_common_next_letter,
    common_next_letter,
    build_password_from,
    recursive_build_password_from,
    PasswordModelError,
    LetterNotFoundError,
    EmptyResultError,
    NoSuccessorAvailable,
    InvalidLengthError,
    InvalidSeedError,
)
from letter_corpus import (
    CorpusFormatError,
    read_observations,
    write_observations,
    count_letter_pairs,
    default_observations,
)

from .generator import GeneratorConfig, PasswordGenerator, load_observations

__all__ = [
    '__version__',
    # Models
    'Observation',
    'ProbabilityModel',
    'LinearScanModel',
    'IndexedModel',
    'construct',
    'possible_next_letters',
    'most_common_next_letter',
    'common_next_letter',
    'build_password_from',
    'recursive_build_password_from',
    # Errors
    'PasswordModelError',
    'LetterNotFoundError',
    'EmptyResultError',
    'NoSuccessorAvailable',
    'InvalidLengthError',
    'InvalidSeedError',
    'CorpusFormatError',
    # Corpus
    'read_observations',
    'write_observations',
    'count_letter_pairs',
    'default_observations',
    'load_observations',
    # Generation
    'GeneratorConfig',
    'PasswordGenerator',
]
