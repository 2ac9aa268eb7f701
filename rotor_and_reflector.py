# rotor_and_reflector.py
from __future__ import annotations

from debug import Debug
from alphabets import ALPHABET

debug = Debug()
debug.disable("rotor")


def check_range(value: int, size: int, what: str = "Offset") -> int:
    """Return *value* unchanged, or raise if it is not a valid wheel position."""
    if not 0 <= value < size:
        raise ValueError(f"{what} {value} out of range 0–{size - 1}")
    return value


class Rotor:
    """A scrambler wheel: fixed wiring plus a rotating offset."""

    def __init__(self, wiring: str, name: str = "", alphabet: str = ALPHABET) -> None:
        if len(wiring) != len(alphabet) or sorted(wiring) != sorted(alphabet):
            raise ValueError("wiring must be a permutation of alphabet")

        self.name = name
        self.alphabet = alphabet
        self.size = len(alphabet)
        self._wiring = wiring

        # integer lookup tables
        self._fwd = [alphabet.index(c) for c in wiring]
        self._rev = [wiring.index(c) for c in alphabet]

        self.position = 0
        self.turnover = 0

    @property
    def wiring(self) -> str:
        return self._wiring

    # ── offset & turnover helpers ─────────────────────────────────
    def set_offset(self, offset: int) -> "Rotor":
        self.position = check_range(offset, self.size)
        debug.log("rotor", f"{self.name} offset -> {offset}")
        return self

    def set_turnover(self, turnover: int) -> "Rotor":
        self.turnover = check_range(turnover, self.size, "Turnover")
        return self

    # ── stepping --------------------------------------------------
    def step(self) -> bool:
        """Advance one and return True when the new position hits the turnover."""
        self.position = (self.position + 1) % self.size
        return self.position == self.turnover

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        return self._fwd[(sig + self.position) % self.size]

    def backward(self, sig: int) -> int:
        return (self._rev[sig] - self.position) % self.size

    # letter-level views of the same paths
    def encrypt_forward(self, c: str) -> str:
        return self.alphabet[self.forward(self.alphabet.index(c))]

    def encrypt_backward(self, c: str) -> str:
        return self.alphabet[self.backward(self.alphabet.index(c))]

    def copy(self) -> "Rotor":
        twin = Rotor(self._wiring, self.name, self.alphabet)
        twin.position = self.position
        twin.turnover = self.turnover
        return twin

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self.name} pos={self.position} turnover={self.turnover}>"


class Reflector:
    def __init__(self, wiring: str, name: str = "", alphabet: str = ALPHABET) -> None:
        if len(wiring) != len(alphabet):
            raise ValueError("Reflector wiring length must match alphabet length")

        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        for i, c in enumerate(wiring):
            if c not in alphabet:
                raise ValueError(f"Reflector symbol {c!r} not in alphabet")
            j = alphabet.index(c)
            if wiring[j] != alphabet[i] or i == j:
                raise ValueError("Reflector wiring must be an involution with no fixed points")

        self.name = name
        self.alphabet = alphabet
        self.size = len(alphabet)
        self._wiring = wiring
        self._map = [alphabet.index(c) for c in wiring]

    @property
    def wiring(self) -> str:
        return self._wiring

    def reflect(self, sig: int) -> int:
        return self._map[sig]

    def encrypt(self, c: str) -> str:
        return self._wiring[self.alphabet.index(c)]

    def __repr__(self) -> str:
        return f"<Reflector {self.name}>"
