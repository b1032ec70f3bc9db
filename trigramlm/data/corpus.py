"""Corpus loading utilities."""

import logging
from pathlib import Path
from typing import Iterable, Union

from trigramlm.models.trigram import EOS_TOKEN


logger = logging.getLogger(__name__)


class CorpusError(RuntimeError):
    """Raised when a corpus file cannot be read."""


def mark_line_ends(lines: Iterable[str]) -> str:
    """Join lines into one corpus with ``<eos>`` boundaries.

    Every non-empty line is preceded by two ``<eos>`` tokens and the text
    ends with one, so ``(<eos>, <eos>)`` is the sentence-start context and
    each line's last two words are followed by ``<eos>``.
    """
    parts = []
    for line in lines:
        words = line.split()
        if not words:
            continue
        parts.extend([EOS_TOKEN, EOS_TOKEN])
        parts.extend(words)
    if parts:
        parts.append(EOS_TOKEN)
    return ' '.join(parts)


def read_corpus(path: Union[str, Path], mark_eos: bool = False) -> str:
    """Read a UTF-8 training corpus.

    Args:
        path: Corpus file
        mark_eos: Add ``<eos>`` boundaries around each line

    Raises:
        CorpusError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusError(f"Cannot read corpus {path}: {e}") from e

    logger.info(f"Read {len(text)} characters from {path}")
    if mark_eos:
        return mark_line_ends(text.splitlines())
    return text
