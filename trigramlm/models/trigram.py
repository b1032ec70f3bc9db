"""Trigram frequency model for trigramlm."""

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Tuple

import torch


logger = logging.getLogger(__name__)

UNK_TOKEN = '<unk>'
EOS_TOKEN = '<eos>'

Context = Tuple[str, str]


def select_weighted(counts: Mapping[str, int], r: int) -> str:
    """Pick the word whose cumulative count interval contains ``r``.

    Words are taken in the mapping's iteration order. The selected word is
    the first one whose running total is strictly greater than ``r``.

    Args:
        counts: Word -> positive count
        r: Integer in [0, total)
    """
    words = list(counts.keys())
    running = torch.cumsum(torch.tensor(list(counts.values()), dtype=torch.long), dim=0)
    total = int(running[-1]) if len(words) else 0
    if not 0 <= r < total:
        raise ValueError(f"r={r} is outside [0, {total})")
    idx = torch.searchsorted(running, torch.tensor([r], dtype=torch.long), right=True)
    return words[int(idx[0])]


class TrigramModel:
    """Word-level trigram model backed by raw transition counts.

    ``trigram_counts`` maps a (word1, word2) context to a Counter of the
    words observed after it. Continuations keep first-observation order,
    which is the order weighted sampling walks them in.
    """

    def __init__(self, generator: Optional[torch.Generator] = None):
        """
        Args:
            generator: Random source for sampling. A non-deterministically
                seeded generator is created when omitted.
        """
        if generator is None:
            generator = torch.Generator()
            generator.seed()
        self.generator = generator
        self.trigram_counts: Dict[Context, Counter] = {}

    def __len__(self) -> int:
        return len(self.trigram_counts)

    def train(self, corpus: str) -> None:
        """Add the trigrams of ``corpus`` to the frequency table.

        Counts accumulate over repeated calls.
        """
        words = [w.lower() for w in corpus.split()]
        contexts_before = len(self.trigram_counts)
        for w1, w2, w3 in zip(words, words[1:], words[2:]):
            counter = self.trigram_counts.get((w1, w2))
            if counter is None:
                counter = self.trigram_counts[(w1, w2)] = Counter()
            counter[w3] += 1
        logger.debug(
            f"Trained {max(0, len(words) - 2)} trigrams, "
            f"{len(self.trigram_counts) - contexts_before} new contexts"
        )

    def get_next_word(self, word1: str, word2: str) -> str:
        """Sample a continuation of (word1, word2) weighted by its counts.

        The context is looked up as given; callers lower-case it. Returns
        ``<unk>`` for an unseen context and ``''`` for a context with no
        continuations.
        """
        candidates = self.trigram_counts.get((word1, word2))
        if candidates is None:
            return UNK_TOKEN
        if not candidates:
            return ''
        total = sum(candidates.values())
        r = int(torch.randint(0, total, (1,), generator=self.generator)[0])
        return select_weighted(candidates, r)

    def next_word_counts(self, word1: str, word2: str) -> Dict[str, int]:
        """Copy of the continuation counts for a context."""
        return dict(self.trigram_counts.get((word1, word2), {}))

    def merge(self, other: 'TrigramModel') -> None:
        """Add the counts of another model into this one."""
        for context, counter in other.trigram_counts.items():
            self.trigram_counts.setdefault(context, Counter()).update(counter)

    def most_common_contexts(self, n: int = 10) -> List[Tuple[Context, int]]:
        """The ``n`` contexts observed most often, with their totals."""
        totals = Counter({
            context: sum(counter.values())
            for context, counter in self.trigram_counts.items()
        })
        return totals.most_common(n)
