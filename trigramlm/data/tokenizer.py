"""Word vocabulary for encoding text to integer ids."""

from collections import Counter
from typing import Dict, Iterable, List, Optional

from trigramlm.models.trigram import UNK_TOKEN

UNK_ID = 0


class WhitespaceTokenizer:
    """Whitespace word vocabulary with frequency filtering.

    Id 0 is reserved for ``<unk>``; every out-of-vocabulary word encodes
    to it and every id outside the vocabulary decodes to it.
    """

    def __init__(
        self,
        texts: Optional[List[str]] = None,
        min_freq: int = 1
    ):
        """
        Args:
            texts: Optional list of texts to build vocabulary from
            min_freq: Minimum frequency threshold for words
        """
        self.stoi: Dict[str, int] = {UNK_TOKEN: UNK_ID}
        self.itos: List[str] = [UNK_TOKEN]

        if texts:
            self.build_vocab(texts, min_freq)

    @property
    def vocab_size(self) -> int:
        return len(self.itos)

    def build_vocab(self, texts: Iterable[str], min_freq: int = 1) -> None:
        """Rebuild the vocabulary from texts, most frequent words first."""
        if min_freq < 1:
            raise ValueError("min_freq must be at least 1")
        frequencies = Counter(word for text in texts for word in text.split())
        frequencies.pop(UNK_TOKEN, None)

        # most_common keeps first-seen order among equal counts
        kept = [w for w, c in frequencies.most_common() if c >= min_freq]
        self.itos = [UNK_TOKEN] + kept
        self.stoi = {w: i for i, w in enumerate(self.itos)}

    def token_id(self, word: str) -> int:
        return self.stoi.get(word, UNK_ID)

    def word(self, token_id: int) -> str:
        if 0 <= token_id < len(self.itos):
            return self.itos[token_id]
        return UNK_TOKEN

    def encode(self, text: str) -> List[int]:
        """Convert text to token ids."""
        return list(map(self.token_id, text.split()))

    def decode(self, ids: Iterable[int]) -> str:
        """Convert token ids back to space-separated text."""
        return ' '.join(map(self.word, ids))
