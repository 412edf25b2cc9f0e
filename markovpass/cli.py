#!/usr/bin/env python3
"""
markovpass CLI
==============
Command-line interface for pronounceable password generation.

Usage:
    markovpass generate -n 5 --length 12
    markovpass generate --seed t --model linear --corpus pairs.csv
    markovpass next q
    markovpass build-corpus words.txt -o pairs.csv
"""

import argparse
import logging
import random
import sys
from pathlib import Path

# Add parent to path
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from markovpass import __version__
from markovpass.generator import GeneratorConfig, PasswordGenerator
from letter_corpus import CorpusFormatError, count_letter_pairs_in_file, write_observations
from pronounceable_password import (
    MODEL_STRATEGIES,
    InvalidLengthError,
    NoSuccessorAvailable,
    PasswordModelError,
)
from settings import get_setting


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def result(self, line: str):
        """Primary output; printed even in quiet mode."""
        print(line)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)


def configure_logging(verbose: bool = False):
    level_name = 'DEBUG' if verbose else get_setting('logging.level', 'WARNING')
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.WARNING),
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
    )


def _make_generator(args, **overrides) -> PasswordGenerator:
    rng = random.Random(args.random_seed) if getattr(args, 'random_seed', None) is not None else None
    config = GeneratorConfig(strategy=args.model, **overrides)
    return PasswordGenerator.from_corpus(args.corpus, config=config, rng=rng)


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate passwords."""
    if args.length is not None and args.length < 1:
        raise InvalidLengthError(f"--length must be at least 1, got {args.length}")
    if args.count < 1:
        out.error("--count must be at least 1")
        return 1

    generator = _make_generator(
        args,
        password_length=args.length,
        sample_limit=args.sample_limit,
        recursive=args.recursive,
    )

    out.print(f"Generating {args.count} password(s) "
              f"(length={generator.config.password_length}, "
              f"window={generator.config.sample_limit})")
    for password in generator.generate_batch(args.count, seed=args.seed):
        out.result(password)
    return 0


def cmd_next(args, out: Output):
    """Show ranked successors of a letter."""
    if len(args.letter) != 1:
        out.error("letter must be a single character")
        return 1
    if args.limit is not None and args.limit < 1:
        out.error("--limit must be at least 1")
        return 1

    generator = _make_generator(args)
    letters = generator.model.possible_next_letters(args.letter.lower())
    if not letters:
        out.error(f"no successors recorded for '{args.letter}'")
        return 1

    if args.limit is not None:
        letters = letters[:args.limit]
    out.result(' '.join(letters))
    return 0


def cmd_build_corpus(args, out: Output):
    """Count letter pairs in a text file and write a corpus CSV."""
    observations = count_letter_pairs_in_file(args.words)
    if not observations:
        out.error(f"no letter pairs found in {args.words}")
        return 1

    rows = write_observations(args.output, observations)
    out.print(f"Wrote {rows} letter pairs to {args.output}")
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='markovpass',
        description='Pronounceable password generator using letter-pair Markov chains',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  markovpass generate -n 5 -l 12        Five 12-letter passwords
  markovpass generate -s q --recursive  Start from 'q', recursive builder
  markovpass next t                     Most likely letters after 't'
  markovpass build-corpus book.txt -o pairs.csv
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    # Shared model options
    model_opts = argparse.ArgumentParser(add_help=False)
    model_opts.add_argument('--model', '-m', choices=sorted(MODEL_STRATEGIES),
                            help='Model strategy (default: from app.yaml)')
    model_opts.add_argument('--corpus', '-c', help='Letter-pair CSV corpus (default: built-in)')
    model_opts.add_argument('--random-seed', type=int, help='Seed the random source for repeatable output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], parents=[model_opts],
                              help='Generate passwords')
    p.add_argument('-n', '--count', type=int, default=get_setting('cli.default_count', 5),
                   help='Number of passwords')
    p.add_argument('-l', '--length', type=int, help='Password length')
    p.add_argument('-s', '--seed', help='Starting letter(s)')
    p.add_argument('-k', '--sample-limit', type=int, help='Commonness window size')
    p.add_argument('--recursive', action='store_true', help='Use the recursive builder')

    # --- next ---
    p = subparsers.add_parser('next', aliases=['n'], parents=[model_opts],
                              help='Show likely next letters')
    p.add_argument('letter', help='Letter to look up')
    p.add_argument('--limit', type=int, help='Show at most this many letters')

    # --- build-corpus ---
    p = subparsers.add_parser('build-corpus', help='Build a corpus CSV from a text file')
    p.add_argument('words', help='Plain text file to count letter pairs in')
    p.add_argument('--output', '-o', required=True, help='Output CSV path')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    # Handle aliases
    cmd_map = {'gen': 'generate', 'g': 'generate', 'n': 'next'}
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'next': cmd_next,
        'build-corpus': cmd_build_corpus,
    }

    handler = commands.get(command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except NoSuccessorAvailable as e:
        out.error(f"password stalled at '{e.letter}' after {len(e.partial)} "
                  f"character(s) ({e.partial}); try another seed or corpus")
        return 1
    except (PasswordModelError, CorpusFormatError, ValueError, OSError) as e:
        out.error(str(e))
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
