# enigma.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from dataclasses import dataclass, field
from random import Random, SystemRandom
from typing import Tuple

from alphabets import ALPHABET
from debug import Debug
from plugboard import SLOTS, LetterPair, Plugboard
from rotor_and_reflector import Reflector, Rotor, check_range
from utilities import STANDARD_CATALOGUE, WheelCatalogue, preprocess_message

debug = Debug()
debug.disable("stepping", "encipher")


# ── the key ─────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class KeySetting:
    """Everything that determines the cipher: order, offsets and plug pairs.

    *pairs* is padded with unplugged slots up to six. Two keys are equal when
    order, offsets and the set of plugged pairs agree; which slot holds a
    pair does not matter.
    """

    order: Tuple[str, str, str]
    offsets: Tuple[int, int, int]
    pairs: Tuple[LetterPair, ...] = field(default=())

    def __post_init__(self) -> None:
        for offset in self.offsets:
            check_range(offset, len(ALPHABET))
        if len(self.pairs) > SLOTS:
            raise ValueError(f"A key holds at most {SLOTS} pairs, got {len(self.pairs)}")
        object.__setattr__(self, "order", tuple(self.order))
        object.__setattr__(self, "offsets", tuple(self.offsets))
        object.__setattr__(
            self, "pairs", tuple(self.pairs) + (LetterPair(),) * (SLOTS - len(self.pairs))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySetting):
            return NotImplemented
        return (self.order, self.offsets, self.plugged) == (other.order, other.offsets, other.plugged)

    def __hash__(self) -> int:
        return hash((self.order, self.offsets, self.plugged))

    @property
    def plugged(self) -> frozenset[frozenset[str]]:
        """The non-identity pairs, ignoring slot order and letter order."""
        return frozenset(
            frozenset((p.one, p.two)) for p in self.pairs if not p.is_identity
        )

    def with_pairs(self, pairs) -> "KeySetting":
        return KeySetting(self.order, self.offsets, tuple(LetterPair.parse(p) for p in pairs))

    def describe(self) -> str:
        """Format as ``II-I-III, 13-0-16, G-P M-X U-D N-K V-J A-A``."""
        return (
            f"{'-'.join(self.order)}, "
            f"{'-'.join(str(o) for o in self.offsets)}, "
            f"{' '.join(str(p) for p in self.pairs)}"
        )


# ── the rotor bank ──────────────────────────────────────────────────

class RotorSet:
    """Three wheels in (left, middle, right) slots with a single-notch cascade."""

    def __init__(self, left: Rotor, middle: Rotor, right: Rotor) -> None:
        self.left = left
        self.middle = middle
        self.right = right

    @property
    def rotors(self) -> Tuple[Rotor, Rotor, Rotor]:
        return self.left, self.middle, self.right

    @property
    def names(self) -> Tuple[str, str, str]:
        return self.left.name, self.middle.name, self.right.name

    @property
    def offsets(self) -> Tuple[int, int, int]:
        return self.left.position, self.middle.position, self.right.position

    def set_offsets(self, left: int, middle: int, right: int) -> None:
        self.left.set_offset(left)
        self.middle.set_offset(middle)
        self.right.set_offset(right)

    def set_turnovers(self, left: int, middle: int, right: int) -> None:
        self.left.set_turnover(left)
        self.middle.set_turnover(middle)
        self.right.set_turnover(right)

    def step(self) -> None:
        """Right always steps; a wheel that lands on its turnover carries one
        step into its left neighbour. No double-step of the middle wheel."""
        if self.right.step():
            if self.middle.step():
                self.left.step()

    def copy(self) -> "RotorSet":
        return RotorSet(self.left.copy(), self.middle.copy(), self.right.copy())

    def __repr__(self) -> str:
        return f"<RotorSet {'-'.join(self.names)} {self.offsets}>"


# ── the machine ─────────────────────────────────────────────────────

class Enigma:
    def __init__(
        self,
        rotors: RotorSet,
        plugboard: Plugboard | None = None,
        reflector: Reflector | None = None,
    ) -> None:
        self.rotors = rotors
        self.plugboard = plugboard if plugboard is not None else Plugboard()
        self.reflector = (
            reflector if reflector is not None else STANDARD_CATALOGUE.make_reflector()
        )
        self.alphabet = rotors.right.alphabet
        self._start = rotors.offsets

    # ── construction helpers ────────────────────────────────────

    @classmethod
    def from_setting(
        cls,
        setting: KeySetting,
        catalogue: WheelCatalogue = STANDARD_CATALOGUE,
    ) -> "Enigma":
        """Build a fresh machine for *setting*; nothing is shared with callers."""
        rotors = RotorSet(*(catalogue.rotor(name) for name in setting.order))
        machine = cls(
            rotors,
            Plugboard(setting.pairs, catalogue.alphabet),
            catalogue.make_reflector(),
        )
        machine.set_offsets(*setting.offsets)
        return machine

    def copy(self) -> "Enigma":
        twin = Enigma(self.rotors.copy(), self.plugboard.copy(), self.reflector)
        twin._start = self._start
        return twin

    # ── key helpers ─────────────────────────────────────────────

    def set_offsets(self, left: int, middle: int, right: int) -> None:
        """Set the wheels and remember them as the message start position."""
        self.rotors.set_offsets(left, middle, right)
        self._start = self.rotors.offsets

    def rewind(self) -> None:
        """Return the wheels to the last start position."""
        self.rotors.set_offsets(*self._start)

    def setting(self) -> KeySetting:
        return KeySetting(self.rotors.names, self.rotors.offsets, self.plugboard.pairs)

    def describe(self) -> str:
        return self.setting().describe()

    def randomise(self, rng: Random | SystemRandom | None = None,
                  catalogue: WheelCatalogue = STANDARD_CATALOGUE) -> None:
        """Pick a random rotor order and offsets; the plugboard is untouched."""
        rng = rng or SystemRandom()
        order = list(catalogue.names)
        rng.shuffle(order)
        self.rotors = RotorSet(*(catalogue.rotor(name) for name in order[:3]))
        self.set_offsets(*(rng.randrange(len(self.alphabet)) for _ in range(3)))

    # ── encipher one symbol ─────────────────────────────────────

    def encipher(self, letter: str) -> str:
        rotors = self.rotors
        rotors.step()
        if debug.components["stepping"]:
            debug.log("stepping", f"Rotor pos {rotors.offsets}")

        signal = self.alphabet.index(letter)
        signal = self.plugboard.forward(signal)

        signal = rotors.right.forward(signal)
        signal = rotors.middle.forward(signal)
        signal = rotors.left.forward(signal)

        signal = self.reflector.reflect(signal)

        signal = rotors.left.backward(signal)
        signal = rotors.middle.backward(signal)
        signal = rotors.right.backward(signal)

        signal = self.plugboard.backward(signal)
        out_ch = self.alphabet[signal]
        if debug.components["encipher"]:
            debug.log("encipher", f"{letter} -> {out_ch}")
        return out_ch

    def encrypt(self, message: str) -> str:
        """Encipher *message* from the current wheel positions.

        Lower case is folded and anything outside the alphabet is dropped.
        Running the same text through a machine set to the same start
        position gives the plaintext back.
        """
        clean = preprocess_message(message, self.alphabet)
        return "".join(self.encipher(ch) for ch in clean)

    decrypt = encrypt

    def __repr__(self) -> str:
        return f"<Enigma {self.describe()}>"
