# utilities.py
from __future__ import annotations

from dataclasses import dataclass
from itertools import permutations
from pathlib import Path
from typing import List, Tuple

from alphabets import ALPHABET
from debug import Debug
from rotor_and_reflector import Rotor, Reflector

debug = Debug()
debug.disable("loader")

# ────────────────────────────────────────────────────────────────────────
#  1. Text preprocessing & presentation
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: str = ALPHABET) -> str:
    """Upper‑case and drop every character outside the alphabet."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


def format_blocks(text: str, block: int = 5) -> str:
    """Group *text* into space-separated blocks, the way radio traffic was sent."""
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  2. Wheel catalogue
# ────────────────────────────────────────────────────────────────────────

RotorOrder = Tuple[str, str, str]


@dataclass(frozen=True)
class WheelCatalogue:
    """Immutable description of the wheels a machine can be built from.

    Only names and wirings are stored, so a catalogue can be shipped to worker
    processes; every call to :meth:`rotor` hands out a fresh wheel.
    """

    rotors: Tuple[Tuple[str, str], ...]
    reflector: Tuple[str, str]
    alphabet: str = ALPHABET

    def __post_init__(self) -> None:
        # build once so a bad wiring fails at start-up, not mid-search
        for name, wiring in self.rotors:
            Rotor(wiring, name, self.alphabet)
        Reflector(self.reflector[1], self.reflector[0], self.alphabet)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.rotors]

    def wiring(self, name: str) -> str:
        for label, wiring in self.rotors:
            if label == name.upper():
                return wiring
        raise ValueError(f"Unknown rotor {name!r}. Expected one of {self.names}")

    def rotor(self, name: str) -> Rotor:
        return Rotor(self.wiring(name), name.upper(), self.alphabet)

    def make_reflector(self) -> Reflector:
        name, wiring = self.reflector
        return Reflector(wiring, name, self.alphabet)

    def orders(self) -> List[RotorOrder]:
        """Every assignment of three catalogue rotors to (left, middle, right)."""
        return list(permutations(self.names, 3))


STANDARD_CATALOGUE = WheelCatalogue(
    rotors=(
        ("I",   "KPTYUELOCVGRFQDANJMBSWHZXI"),
        ("II",  "UPHZLWEQMTDJXCAKSOIGVBYFNR"),
        ("III", "QUDLYRFEKONVZAXWHMGPJBSICT"),
    ),
    reflector=("UKW", "GEKPBTAUMOCNILJDXZYFHWVQSR"),
)


# ────────────────────────────────────────────────────────────────────────
#  3. Message corpus
# ────────────────────────────────────────────────────────────────────────


def load_messages(path: str | Path, skip: int = 6) -> List[str]:
    """Read one message per line, dropping the leading *skip* letters.

    Intercepts carry their six-letter message key up front; it is removed so
    it does not skew the letter distribution of the text.
    """
    messages: List[str] = []
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            text = preprocess_message(line)
            if not text:
                continue
            messages.append(text[skip:])
    debug.log("loader", f"{len(messages)} messages from {path}")
    return messages


__all__ = [
    "STANDARD_CATALOGUE",
    "WheelCatalogue",
    "format_blocks",
    "load_messages",
    "preprocess_message",
]
