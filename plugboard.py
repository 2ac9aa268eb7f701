# plugboard.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from alphabets import ALPHABET
from debug import Debug

debug = Debug()
debug.disable("plugboard")

SLOTS = 6


# ── LetterPair ────────────────────────────────────────────────────
@dataclass(frozen=True, eq=False)
class LetterPair:
    """Two letters wired together; a pair of equal letters is unplugged.

    Pairs are unordered: G-P equals P-G, and every unplugged pair equals
    every other one.
    """

    one: str = "A"
    two: str = "A"

    @classmethod
    def parse(cls, raw: "str | tuple[str, str] | LetterPair") -> "LetterPair":
        if isinstance(raw, LetterPair):
            return raw
        if isinstance(raw, str):
            text = raw.replace("-", "").strip().upper()
            if len(text) != 2:
                raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
            return cls(text[0], text[1])
        a, b = raw
        return cls(a.upper(), b.upper())

    @property
    def is_identity(self) -> bool:
        return self.one == self.two

    def contains(self, c: str) -> bool:
        return c == self.one or c == self.two

    def encrypt(self, c: str) -> str:
        """Partner of *c*; assumes contains(c)."""
        return self.two if c == self.one else self.one

    def _key(self) -> frozenset[str] | None:
        return None if self.is_identity else frozenset((self.one, self.two))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LetterPair):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.one}-{self.two}"


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Six ordered swap slots, filled one at a time by the cracker.

    Disjointness of the pairs is not checked: a letter must not appear in
    more than one non-identity slot, otherwise encrypt() stops being an
    involution.
    """

    def __init__(
        self,
        pairs: Sequence["str | tuple[str, str] | LetterPair"] = (),
        alphabet: str = ALPHABET,
    ) -> None:
        if len(pairs) > SLOTS:
            raise ValueError(f"Plugboard holds at most {SLOTS} pairs, got {len(pairs)}")

        self.alphabet: str = alphabet
        self._slots: list[LetterPair] = [LetterPair(alphabet[0], alphabet[0])] * SLOTS
        for slot, raw in enumerate(pairs):
            self._slots[slot] = self._checked(LetterPair.parse(raw))
        self._rebuild()

    # ── slot access ──────────────────────────────────────────────
    @property
    def pairs(self) -> tuple[LetterPair, ...]:
        return tuple(self._slots)

    def pair(self, slot: int) -> LetterPair:
        return self._slots[slot]

    def set_pair(self, slot: int, pair: "str | tuple[str, str] | LetterPair") -> None:
        if not 0 <= slot < SLOTS:
            raise IndexError(f"Plugboard slot {slot} out of range 0–{SLOTS - 1}")
        self._slots[slot] = self._checked(LetterPair.parse(pair))
        self._rebuild()
        debug.log("plugboard", f"slot {slot} <- {self._slots[slot]}")

    # ── queries ──────────────────────────────────────────────────
    def is_plugged(self, c: str) -> bool:
        return any(p.contains(c) and not p.is_identity for p in self._slots)

    def encrypt(self, c: str) -> str:
        for p in self._slots:
            if not p.is_identity and p.contains(c):
                return p.encrypt(c)
        return c

    # integer-signal path used by the machine; same table both directions
    def _map(self, signal: int) -> int:
        return self._table[signal]

    forward = _map
    backward = _map

    def copy(self) -> "Plugboard":
        return Plugboard(self._slots, self.alphabet)

    # ── helpers ──────────────────────────────────────────────────
    def _checked(self, pair: LetterPair) -> LetterPair:
        for c in (pair.one, pair.two):
            if c not in self.alphabet:
                raise ValueError(f"Symbol {c!r} not in alphabet")
        return pair

    def _rebuild(self) -> None:
        # first non-identity slot holding a letter wins, as in encrypt()
        index = {ch: i for i, ch in enumerate(self.alphabet)}
        table = list(range(len(self.alphabet)))
        seen: set[str] = set()
        for p in self._slots:
            if p.is_identity:
                continue
            for a, b in ((p.one, p.two), (p.two, p.one)):
                if a not in seen:
                    table[index[a]] = index[b]
                    seen.add(a)
        self._table = table

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plugboard):
            return NotImplemented
        return self._slots == other._slots

    # nicety for debugging
    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(str(p) for p in self._slots)}>"
