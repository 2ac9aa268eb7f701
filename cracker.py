# cracker.py
"""Ciphertext-only attack on the three-rotor machine.

Phase 1 brute-forces every rotor order and start position with an empty
plugboard and keeps the ones whose decryption has an English-like index of
coincidence. Phase 2 hill-climbs the plugboard of each survivor one slot at a
time, scoring decryptions against an n-gram frequency table.
"""
from __future__ import annotations

import concurrent.futures
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from alphabets import FREQUENCY_ORDER
from debug import Debug
from enigma import Enigma, KeySetting
from plugboard import SLOTS, LetterPair
from scoring import FrequencyTable, index_of_coincidence, ngram_score, same_key
from utilities import STANDARD_CATALOGUE, RotorOrder, WheelCatalogue, preprocess_message

debug = Debug()
debug.disable("search", "hillclimb")

IC_THRESHOLD = 0.05
MIN_LENGTH = 94


@dataclass(slots=True)
class CrackConfig:
    """Knobs for one crack run."""

    ic_threshold: float = IC_THRESHOLD   # keep rotor settings at or above this IC
    min_length: int = MIN_LENGTH         # shorter texts are not attempted
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)


# ────────────────────────────────────────────────────────────────────────
#  Worker plumbing
# ────────────────────────────────────────────────────────────────────────

_TABLE: Optional[FrequencyTable] = None


def _worker_initializer(table: Optional[FrequencyTable]) -> None:
    """Install the shared, read-only frequency table in this process."""
    global _TABLE
    _TABLE = table


def _run_tasks(
    worker: Callable,
    tasks: Sequence[tuple],
    workers: int,
    table: Optional[FrequencyTable] = None,
    label: str = "task",
) -> list:
    """Run *worker* over *tasks*, in worker processes when asked to.

    Results come back in task order.
    """
    if workers <= 1 or len(tasks) <= 1:
        _worker_initializer(table)
        return [worker(task) for task in tasks]

    results: Dict[int, object] = {}
    with concurrent.futures.ProcessPoolExecutor(
        max_workers=min(workers, len(tasks)),
        initializer=_worker_initializer,
        initargs=(table,),
    ) as executor:
        futures = {executor.submit(worker, task): idx for idx, task in enumerate(tasks)}
        total = len(futures)
        for done, future in enumerate(concurrent.futures.as_completed(futures), 1):
            results[futures[future]] = future.result()
            if done % 26 == 0 or done == total:
                debug.log("search", f"{label} {done}/{total} finished")
    return [results[idx] for idx in range(len(tasks))]


# ────────────────────────────────────────────────────────────────────────
#  Phase 1: rotor order and offsets
# ────────────────────────────────────────────────────────────────────────


def setting_ic(machine: Enigma, ciphertext: str) -> float:
    """IC of *ciphertext* deciphered from the machine's start position."""
    machine.rewind()
    return index_of_coincidence(machine.decrypt(ciphertext))


def search_partition(
    order: RotorOrder,
    left: int,
    ciphertext: str,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
    threshold: float = IC_THRESHOLD,
) -> List[KeySetting]:
    """Try every middle/right offset for one rotor order and left offset."""
    machine = Enigma.from_setting(KeySetting(order, (left, 0, 0)), catalogue)
    size = len(catalogue.alphabet)
    found: List[KeySetting] = []
    for middle in range(size):
        for right in range(size):
            machine.set_offsets(left, middle, right)
            ic = setting_ic(machine, ciphertext)
            if ic >= threshold:
                debug.log("search", f"{'-'.join(order)} {left}-{middle}-{right} IC={ic:.4f}")
                found.append(KeySetting(order, (left, middle, right)))
    return found


def _search_worker(args: tuple) -> List[KeySetting]:
    return search_partition(*args)


def search_offsets(
    order: RotorOrder,
    ciphertext: str,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
    config: Optional[CrackConfig] = None,
    left_offsets: Optional[Iterable[int]] = None,
) -> List[KeySetting]:
    """Phase 1 for a single rotor order, optionally over some left offsets only."""
    config = config or CrackConfig()
    lefts = range(len(catalogue.alphabet)) if left_offsets is None else left_offsets
    tasks = [(tuple(order), left, ciphertext, catalogue, config.ic_threshold) for left in lefts]
    return _flatten(_run_tasks(_search_worker, tasks, config.workers, label="partition"))


def search_rotor_settings(
    ciphertext: str,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
    config: Optional[CrackConfig] = None,
) -> List[KeySetting]:
    """Phase 1 over every rotor order: 6 × 26³ trials."""
    config = config or CrackConfig()
    size = len(catalogue.alphabet)
    tasks = [
        (order, left, ciphertext, catalogue, config.ic_threshold)
        for order in catalogue.orders()
        for left in range(size)
    ]
    debug.info("search", f"testing {len(tasks) * size * size} rotor settings on {config.workers} worker(s)")
    return _flatten(_run_tasks(_search_worker, tasks, config.workers, label="partition"))


def find_best_setting(
    candidates: Sequence[KeySetting],
    ciphertext: str,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
) -> Optional[KeySetting]:
    """The candidate with the highest IC.

    Faster than climbing every survivor, but the top IC is not always the
    true key, so crack_message() does not use it.
    """
    if not candidates:
        return None
    return max(
        candidates,
        key=lambda setting: setting_ic(Enigma.from_setting(setting, catalogue), ciphertext),
    )


def _flatten(chunks: Iterable[List[KeySetting]]) -> List[KeySetting]:
    return [setting for chunk in chunks for setting in chunk]


# ────────────────────────────────────────────────────────────────────────
#  Phase 2: plugboard hill-climb
# ────────────────────────────────────────────────────────────────────────


def try_swap(machine: Enigma, ciphertext: str, slot: int, pair: LetterPair) -> str:
    """Put *pair* in *slot* and decipher from the start position."""
    machine.plugboard.set_pair(slot, pair)
    machine.rewind()
    return machine.decrypt(ciphertext)


def find_pair_ngram(
    machine: Enigma,
    ciphertext: str,
    table: FrequencyTable,
    slot: int,
    letters: str = FREQUENCY_ORDER,
) -> LetterPair:
    """Best pair for *slot*, given the pairs already fixed in other slots.

    Pairs are tried in English letter-frequency order and only a strictly
    higher score replaces the current best, so the trial order decides ties.
    Leaving the slot unplugged is scored first; if nothing beats it the slot
    stays empty. The machine's slot is left holding the returned pair.
    """
    blank = LetterPair(letters[0], letters[0])
    best_pair = blank
    best_score = ngram_score(try_swap(machine, ciphertext, slot, blank), table)
    free = [c for c in letters if not machine.plugboard.is_plugged(c)]

    for i, first in enumerate(free):
        for second in free[i + 1 :]:
            pair = LetterPair(first, second)
            score = ngram_score(try_swap(machine, ciphertext, slot, pair), table)
            if score > best_score:
                best_pair, best_score = pair, score

    machine.plugboard.set_pair(slot, best_pair)
    debug.log("hillclimb", f"slot {slot}: {best_pair} score={best_score}")
    return best_pair


def find_plugboard_settings(
    setting: KeySetting,
    ciphertext: str,
    table: FrequencyTable,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
) -> KeySetting:
    """Fill the six plugboard slots in order, greedily, for fixed rotors."""
    machine = Enigma.from_setting(setting.with_pairs(()), catalogue)
    for slot in range(SLOTS):
        find_pair_ngram(machine, ciphertext, table, slot)
    machine.rewind()
    return machine.setting()


def _climb_worker(args: tuple) -> KeySetting:
    setting, ciphertext, catalogue = args
    if _TABLE is None:
        raise RuntimeError("frequency table not installed in worker")
    return find_plugboard_settings(setting, ciphertext, _TABLE, catalogue)


# ────────────────────────────────────────────────────────────────────────
#  Orchestration
# ────────────────────────────────────────────────────────────────────────


def crack_message(
    ciphertext: str,
    table: FrequencyTable,
    config: Optional[CrackConfig] = None,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
) -> List[Enigma]:
    """Every plausible full key for *ciphertext*, one machine per survivor.

    Each machine is set to its start position, so ``machine.decrypt(text)``
    gives the candidate plaintext. Texts shorter than ``config.min_length``
    letters are not attempted and yield an empty list.
    """
    config = config or CrackConfig()
    text = preprocess_message(ciphertext, catalogue.alphabet)
    if len(text) < config.min_length:
        debug.warning(
            "search",
            f"Message too short to be cracked ({len(text)} < {config.min_length} letters). "
            "Try a longer message",
        )
        return []

    keys = search_rotor_settings(text, catalogue, config)
    debug.info("search", f"{len(keys)} rotor setting(s) passed IC >= {config.ic_threshold}")

    tasks = [(key, text, catalogue) for key in keys]
    settings = _run_tasks(_climb_worker, tasks, config.workers, table, label="climb")
    for setting in settings:
        debug.info("hillclimb", f"candidate {setting.describe()}")
    return [Enigma.from_setting(setting, catalogue) for setting in settings]


def crack_messages(
    first: str,
    second: str,
    table: FrequencyTable,
    config: Optional[CrackConfig] = None,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
) -> List[Enigma]:
    """Crack two messages sent on one key by joining them for more signal."""
    a = preprocess_message(first, catalogue.alphabet)
    b = preprocess_message(second, catalogue.alphabet)
    if not same_key(a, b):
        debug.warning(
            "search",
            "Messages were not encrypted using the same setting. "
            "Crack them separately with crack_message()",
        )
        return []
    return crack_message(a + b, table, config, catalogue)


__all__ = [
    "CrackConfig",
    "crack_message",
    "crack_messages",
    "find_best_setting",
    "find_pair_ngram",
    "find_plugboard_settings",
    "search_partition",
    "search_offsets",
    "search_rotor_settings",
    "setting_ic",
]
