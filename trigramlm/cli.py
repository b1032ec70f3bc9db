"""Command-line interface for training and generation."""

import argparse
import logging
import sys
from pathlib import Path

import torch

from trigramlm.data.corpus import CorpusError, read_corpus
from trigramlm.data.tokenizer import WhitespaceTokenizer
from trigramlm.models.trigram import EOS_TOKEN, TrigramModel
from trigramlm.utils.trainer import GenerationConfig, Generator, Trainer


logger = logging.getLogger(__name__)


def setup_logging(level=logging.INFO):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_model(args) -> TrigramModel:
    """Create a model and train it once on the corpus."""
    generator = None
    if args.seed is not None:
        generator = torch.Generator().manual_seed(args.seed)
    model = TrigramModel(generator=generator)
    Trainer(model).train_files([args.data], mark_eos=args.line_eos)
    return model


def generate(args):
    """Train on the corpus and print generated sentences."""
    model = build_model(args)
    config = GenerationConfig(
        max_tokens=args.max_tokens,
        stop_on_unknown=args.stop_on_unknown,
    )
    generator = Generator(model, config)
    word1, word2 = args.seed_words
    for _ in range(args.count):
        print(generator.generate_sentence(word1, word2))


def stats(args):
    """Train on the corpus and print its most frequent contexts."""
    model = build_model(args)
    print(f"contexts: {len(model)}")
    for (word1, word2), total in model.most_common_contexts(args.top):
        print(f"{word1} {word2} ({total}) -> {model.next_word_counts(word1, word2)}")


def tokenize(args):
    """Encode and decode text with a vocabulary built from the corpus."""
    corpus = read_corpus(args.data)
    tokenizer = WhitespaceTokenizer(corpus.splitlines(), min_freq=args.min_freq)
    logger.info(f"Vocabulary size: {tokenizer.vocab_size}")
    encoded = tokenizer.encode(args.text)
    print(f"encoded: {encoded}")
    print(f"decoded: {tokenizer.decode(encoded)}")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Train a trigram model on a corpus and generate text'
    )
    parser.add_argument(
        '--data',
        type=Path,
        default=Path('data.txt'),
        help='Training corpus file'
    )
    parser.add_argument(
        '--no-line-eos',
        dest='line_eos',
        action='store_false',
        help=f'Train on the raw text instead of one sentence per line bounded by {EOS_TOKEN}'
    )
    parser.add_argument(
        '--seed',
        type=int,
        help='Random seed for reproducible sampling'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    # Generation arguments
    generate_parser = subparsers.add_parser('generate')
    generate_parser.add_argument(
        'seed_words',
        nargs='*',
        default=[EOS_TOKEN, EOS_TOKEN],
        metavar='WORD',
        help=f'Two seed words (default: {EOS_TOKEN} {EOS_TOKEN})'
    )
    generate_parser.add_argument('--count', type=int, default=1)
    generate_parser.add_argument('--max-tokens', type=int, default=100)
    generate_parser.add_argument('--stop-on-unknown', action='store_true')

    stats_parser = subparsers.add_parser('stats')
    stats_parser.add_argument('--top', type=int, default=10)

    tokenize_parser = subparsers.add_parser('tokenize')
    tokenize_parser.add_argument('text', type=str)
    tokenize_parser.add_argument('--min-freq', type=int, default=1)

    args = parser.parse_args(argv)
    if args.command == 'generate' and len(args.seed_words) != 2:
        parser.error('generate takes exactly two seed words')
    if args.command == 'generate' and args.max_tokens < 1:
        parser.error('--max-tokens must be at least 1')
    if args.command == 'generate' and args.count < 1:
        parser.error('--count must be at least 1')
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    commands = {'generate': generate, 'stats': stats, 'tokenize': tokenize}
    try:
        commands[args.command](args)
    except CorpusError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
