#!/usr/bin/env python3
"""
Letter-Pair Corpus
==================
Reads and writes letter-pair count corpora and derives them from plain text.

Corpus files are CSV with a header row:

    letter pair,count
    th,1250
    he,980

A built-in word corpus is bundled so that passwords can be generated
without any corpus file on disk.
"""

import csv
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Iterable, Iterator

from pronounceable_password import Observation

logger = logging.getLogger(__name__)

PAIR_COLUMN = "letter pair"
COUNT_COLUMN = "count"


# =============================================================================
# DEFAULT WORD CORPUS
# =============================================================================

# Common English words, chosen so that every letter a-z has at least one
# successor. Counted with count_letter_pairs() on demand.
DEFAULT_WORDS = [
    # Everyday words
    'about', 'after', 'again', 'almost', 'along', 'always', 'animal',
    'another', 'answer', 'around', 'banana', 'before', 'began', 'behind',
    'better', 'between', 'bottle', 'bridge', 'brother', 'butter', 'called',
    'candle', 'carry', 'center', 'change', 'children', 'circle', 'city',
    'close', 'color', 'common', 'country', 'course', 'cover', 'dance',
    'danger', 'different', 'dinner', 'doctor', 'dollar', 'during', 'early',
    'earth', 'enough', 'evening', 'every', 'family', 'father', 'feather',
    'finger', 'follow', 'forest', 'forward', 'garden', 'gather', 'gentle',
    'golden', 'govern', 'greater', 'ground', 'handle', 'happen', 'harbor',
    'heavy', 'hello', 'hidden', 'history', 'honest', 'house', 'hunter',
    'island', 'kettle', 'kitchen', 'ladder', 'language', 'later', 'letter',
    'little', 'listen', 'mother', 'mountain', 'number', 'often', 'orange',
    'other', 'paper', 'people', 'pencil', 'picture', 'planet', 'pocket',
    'problem', 'question', 'rabbit', 'rather', 'river', 'second', 'sentence',
    'silver', 'simple', 'sister', 'something', 'sound', 'spring', 'station',
    'story', 'summer', 'sunday', 'table', 'thank', 'there', 'thing', 'think',
    'together', 'travel', 'under', 'until', 'valley', 'village', 'water',
    'weather', 'window', 'winter', 'without', 'wonder', 'yellow', 'yesterday',
    # Less frequent letters
    'joke', 'jungle', 'jacket', 'major', 'enjoy', 'object', 'juice',
    'quick', 'quiet', 'queen', 'equal', 'square', 'liquid', 'quarter',
    'taxi', 'exit', 'oxygen', 'boxer', 'mixer', 'example', 'sixty',
    'zero', 'zone', 'puzzle', 'lazy', 'frozen', 'wizard', 'amazing',
    'very', 'seven', 'cover', 'over', 'silver', 'vivid', 'driven',
    'key', 'keep', 'market', 'basket', 'broken', 'sky', 'yard', 'young',
    'layer', 'player', 'crayon', 'flower', 'power', 'awake', 'owner',
]


# =============================================================================
# ERRORS
# =============================================================================

class CorpusFormatError(ValueError):
    """A corpus row could not be parsed."""

    def __init__(self, path, line: int, message: str):
        super().__init__(f"{path}:{line}: {message}")
        self.path = path
        self.line = line


# =============================================================================
# READING / WRITING
# =============================================================================

def read_observations(path,
                      pair_column: str = PAIR_COLUMN,
                      count_column: str = COUNT_COLUMN) -> Iterator[Observation]:
    """
    Lazily yield observations from a headed CSV corpus file.

    Args:
        path: CSV file location
        pair_column: Header of the two-letter pair column
        count_column: Header of the count column (empty cells count as 0)

    Raises:
        CorpusFormatError: On a missing column, bad pair, or bad count
    """
    path = Path(path)
    with path.open(newline='') as f:
        reader = csv.DictReader(f)
        fields = reader.fieldnames or []
        if pair_column not in fields:
            raise CorpusFormatError(path, 1, f"missing column '{pair_column}'")

        rows = 0
        for row in reader:
            rows += 1
            raw_count = (row.get(count_column) or '').strip() or 0
            try:
                yield Observation.from_pair(row[pair_column], raw_count)
            except ValueError as e:
                raise CorpusFormatError(path, reader.line_num, str(e)) from e

        logger.debug(f"Read {rows} letter pairs from {path}")


def write_observations(path,
                       observations: Iterable[Observation],
                       pair_column: str = PAIR_COLUMN,
                       count_column: str = COUNT_COLUMN) -> int:
    """Write observations as a headed CSV corpus. Returns rows written."""
    rows = 0
    with Path(path).open('w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow([pair_column, count_column])
        for obs in observations:
            writer.writerow([obs.pair, obs.count])
            rows += 1
    return rows


# =============================================================================
# COUNTING
# =============================================================================

_NON_LETTERS = re.compile(r'[^a-z]+')


def count_letter_pairs(words: Iterable[str]) -> list[Observation]:
    """
    Count adjacent letter pairs in a collection of words or lines.

    Text is lowercased and split on anything that is not an ASCII letter;
    fragments shorter than two letters are ignored. Pairs are returned in
    order of first appearance.
    """
    counts = Counter()
    for text in words:
        for word in _NON_LETTERS.split(text.lower()):
            if len(word) < 2:
                continue
            for a, b in zip(word, word[1:]):
                counts[a + b] += 1

    return [Observation.from_pair(pair, count) for pair, count in counts.items()]


def count_letter_pairs_in_file(path) -> list[Observation]:
    """Count letter pairs in a plain text file"""
    with Path(path).open() as f:
        return count_letter_pairs(f)


def default_observations() -> list[Observation]:
    """Observations counted from the built-in word corpus"""
    return count_letter_pairs(DEFAULT_WORDS)


__all__ = [
    'DEFAULT_WORDS',
    'PAIR_COLUMN',
    'COUNT_COLUMN',
    'CorpusFormatError',
    'read_observations',
    'write_observations',
    'count_letter_pairs',
    'count_letter_pairs_in_file',
    'default_observations',
]
