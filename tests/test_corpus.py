"""
Tests for Letter-Pair Corpus
============================
Tests for CSV reading/writing, pair counting, and the built-in
word corpus in letter_corpus.py.
"""

import string

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from letter_corpus import (
    DEFAULT_WORDS,
    CorpusFormatError,
    read_observations,
    write_observations,
    count_letter_pairs,
    count_letter_pairs_in_file,
    default_observations,
)
from pronounceable_password import Observation, construct


def _write(path, text):
    path.write_text(text)
    return path


class TestReadObservations:
    """Tests for read_observations()."""

    def test_reads_rows(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\nth,10\nhe,9\n")
        assert list(read_observations(path)) == [
            Observation("t", "h", 10),
            Observation("h", "e", 9),
        ]

    def test_is_lazy(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\nth,10\nbad,1\n")
        rows = read_observations(path)
        assert next(rows) == Observation("t", "h", 10)
        with pytest.raises(CorpusFormatError):
            next(rows)

    def test_empty_count_is_zero(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\nab,\n")
        assert list(read_observations(path)) == [Observation("a", "b", 0)]

    def test_missing_count_column_is_zero(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair\nab\n")
        assert list(read_observations(path)) == [Observation("a", "b", 0)]

    def test_custom_columns(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "bigram,freq\nqu,4\n")
        rows = list(read_observations(path, pair_column="bigram", count_column="freq"))
        assert rows == [Observation("q", "u", 4)]

    def test_header_only(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\n")
        assert list(read_observations(path)) == []

    def test_missing_pair_column(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "pair,count\nab,1\n")
        with pytest.raises(CorpusFormatError, match="missing column"):
            list(read_observations(path))

    def test_bad_pair_reports_line(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\nab,1\nabc,2\n")
        with pytest.raises(CorpusFormatError) as exc_info:
            list(read_observations(path))
        assert exc_info.value.line == 3
        assert "pairs.csv:3" in str(exc_info.value)

    def test_non_numeric_count(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\nab,many\n")
        with pytest.raises(CorpusFormatError):
            list(read_observations(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(read_observations(tmp_path / "nope.csv"))

    def test_feeds_model(self, tmp_path):
        path = _write(tmp_path / "pairs.csv", "letter pair,count\nab,3\nab,5\nac,1\n")
        model = construct(read_observations(path))
        assert model.successor_counts("a") == {"b": 8, "c": 1}


class TestWriteObservations:
    """Tests for write_observations()."""

    def test_writes_header_and_rows(self, tmp_path):
        path = tmp_path / "out.csv"
        rows = write_observations(path, [Observation("t", "h", 10), Observation("h", "e", 9)])
        assert rows == 2
        assert path.read_text().splitlines() == ["letter pair,count", "th,10", "he,9"]

    def test_readable_by_reader(self, tmp_path):
        path = tmp_path / "out.csv"
        observations = count_letter_pairs(["banana", "bandana"])
        write_observations(path, observations)
        assert list(read_observations(path)) == observations


class TestCountLetterPairs:
    """Tests for count_letter_pairs()."""

    def test_counts(self):
        counts = {o.pair: o.count for o in count_letter_pairs(["banana"])}
        assert counts == {"ba": 1, "an": 2, "na": 2}

    def test_first_appearance_order(self):
        pairs = [o.pair for o in count_letter_pairs(["the", "hat"])]
        assert pairs == ["th", "he", "ha", "at"]

    def test_lowercases_and_splits(self):
        counts = {o.pair: o.count for o in count_letter_pairs(["Hi-Fi, it's OK!"])}
        assert counts == {"hi": 1, "fi": 1, "it": 1, "ok": 1}

    def test_ignores_short_fragments(self):
        assert count_letter_pairs(["a b c", "", "1234"]) == []

    def test_from_file(self, tmp_path):
        path = _write(tmp_path / "words.txt", "hello\nworld\n")
        pairs = {o.pair for o in count_letter_pairs_in_file(path)}
        assert pairs == {"he", "el", "ll", "lo", "wo", "or", "rl", "ld"}


class TestDefaultCorpus:
    """Tests for the built-in word corpus."""

    def test_words_are_lowercase_letters(self):
        for word in DEFAULT_WORDS:
            assert word.isalpha() and word == word.lower()

    def test_every_letter_has_successors(self):
        model = construct(default_observations())
        for letter in string.ascii_lowercase:
            assert model.possible_next_letters(letter), letter

    def test_q_is_followed_by_u(self):
        model = construct(default_observations())
        assert model.possible_next_letters("q") == ["u"]
