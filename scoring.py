# scoring.py
"""Statistics used to tell English-like decryptions from noise."""
from __future__ import annotations

import csv
from collections import Counter
from pathlib import Path
from typing import Dict, Mapping

from alphabets import ALPHABET
from debug import Debug

debug = Debug()
debug.disable("scoring", "loader")

SAME_KEY_THRESHOLD = 0.05


# ────────────────────────────────────────────────────────────────────────
#  Index of coincidence
# ────────────────────────────────────────────────────────────────────────


def index_of_coincidence(text: str, alpha: str = ALPHABET) -> float:
    """Probability that two letters drawn from *text* are the same.

    Uniformly random letters give about 0.038, English about 0.067.
    """
    n = len(text)
    if n <= 1:
        raise ValueError(f"Index of coincidence needs at least 2 letters, got {n}")
    counts = Counter(text)
    total = sum(counts[ch] * (counts[ch] - 1) for ch in alpha)
    return total / (n * (n - 1))


# ────────────────────────────────────────────────────────────────────────
#  N-gram frequency tables
# ────────────────────────────────────────────────────────────────────────


class FrequencyTable:
    """Read-only n-gram → count map; unknown n-grams count zero."""

    def __init__(self, counts: Mapping[str, int]) -> None:
        lengths = {len(k) for k in counts}
        if len(lengths) > 1:
            raise ValueError(f"Mixed n-gram lengths in table: {sorted(lengths)}")
        for gram, count in counts.items():
            if count < 0:
                raise ValueError(f"Negative count {count} for {gram!r}")
        self._counts: Dict[str, int] = dict(counts)
        self.n: int = lengths.pop() if lengths else 0

    @classmethod
    def from_csv(cls, path: str | Path) -> "FrequencyTable":
        """Load a two-column ``ngram,count`` file."""
        counts: Dict[str, int] = {}
        with open(path, "r", encoding="utf-8", newline="") as fh:
            for lineno, row in enumerate(csv.reader(fh), 1):
                if len(row) < 2:
                    continue
                gram, raw = row[0].strip().upper(), row[1].strip()
                try:
                    counts[gram] = int(raw)
                except ValueError:
                    debug.log("loader", f"{path}:{lineno}: skipped row {row!r}")
        debug.log("loader", f"{len(counts)} n-grams from {path}")
        return cls(counts)

    @classmethod
    def from_text(cls, text: str, n: int = 2) -> "FrequencyTable":
        """Count the overlapping n-grams of an already-normalised corpus."""
        return cls(Counter(text[i : i + n] for i in range(len(text) - n + 1)))

    def lookup(self, ngram: str) -> int:
        return self._counts.get(ngram, 0)

    __getitem__ = lookup

    def __contains__(self, ngram: object) -> bool:
        return ngram in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"<FrequencyTable n={self.n} entries={len(self)}>"


def ngram_score(text: str, table: FrequencyTable, n: int | None = None) -> int:
    """Sum the table counts of every overlapping n-gram of *text*."""
    n = n or table.n
    lookup = table.lookup
    return sum(lookup(text[i : i + n]) for i in range(len(text) - n + 1))


# ────────────────────────────────────────────────────────────────────────
#  Same-key test
# ────────────────────────────────────────────────────────────────────────


def match_rate(first: str, second: str) -> float:
    """Fraction of aligned positions where the two texts agree."""
    length = min(len(first), len(second))
    if length == 0:
        return 0.0
    matches = sum(a == b for a, b in zip(first, second))
    return matches / length


def same_key(first: str, second: str, threshold: float = SAME_KEY_THRESHOLD) -> bool:
    """Guess whether two ciphertexts were enciphered from the same start.

    Under one key both streams see the same permutation at each position,
    so they agree about as often as two English texts do (~1/15); under
    unrelated keys agreement drops to ~1/26.
    """
    rate = match_rate(first, second)
    debug.log("scoring", f"match rate {rate:.4f} over {min(len(first), len(second))} letters")
    return rate > threshold
