"""Utilities for training and generation."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from trigramlm.data.corpus import read_corpus
from trigramlm.models.trigram import EOS_TOKEN, UNK_TOKEN, TrigramModel


logger = logging.getLogger(__name__)


class Trainer:
    """Training helper that feeds corpora into a TrigramModel."""

    def __init__(self, model: TrigramModel):
        self.model = model

    def train_text(self, text: str) -> None:
        """Train on one corpus string, adding to existing counts."""
        contexts_before = len(self.model)
        self.model.train(text)
        logger.info(
            f"Trained on {len(text.split())} words: "
            f"{len(self.model)} contexts ({len(self.model) - contexts_before} new)"
        )

    def train_files(
        self,
        paths: Iterable[Union[str, Path]],
        mark_eos: bool = False,
    ) -> None:
        """Train on each corpus file in turn.

        Args:
            paths: Corpus files, read as UTF-8
            mark_eos: Add ``<eos>`` boundaries around each line
        """
        for path in paths:
            self.train_text(read_corpus(path, mark_eos=mark_eos))


@dataclass
class GenerationConfig:
    """Settings for the sentence-generation loop."""
    max_tokens: int = 100
    stop_on_unknown: bool = False

    def __post_init__(self) -> None:
        if self.max_tokens < 1:
            raise ValueError("max_tokens must be at least 1")


class Generator:
    """Text generation helper for TrigramModel.

    Slides a two-word window over the model's samples until ``<eos>`` is
    drawn or ``max_tokens`` words have been produced.
    """

    def __init__(
        self,
        model: TrigramModel,
        config: Optional[GenerationConfig] = None,
    ):
        """
        Args:
            model: Trained trigram model
            config: Generation limits, defaults to GenerationConfig()
        """
        self.model = model
        self.config = config or GenerationConfig()

    def iter_words(self, word1: str, word2: str) -> Iterator[str]:
        """Yield the seed words followed by generated words.

        Seed words equal to ``<eos>`` are not yielded.
        """
        for seed in (word1, word2):
            if seed != EOS_TOKEN:
                yield seed

        for _ in range(self.config.max_tokens):
            next_word = self.model.get_next_word(word1.lower(), word2.lower())
            if next_word == EOS_TOKEN or next_word == '':
                return
            if next_word == UNK_TOKEN and self.config.stop_on_unknown:
                logger.debug(f"Stopping at unseen context ({word1!r}, {word2!r})")
                return
            yield next_word
            word1, word2 = word2, next_word

        logger.warning(
            f"Reached max_tokens cap of {self.config.max_tokens}, stopping generation"
        )

    def generate_sentence(self, word1: str, word2: str) -> str:
        """Generate text continuing from the seed words."""
        return ' '.join(self.iter_words(word1, word2))
