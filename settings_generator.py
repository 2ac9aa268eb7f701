# settings_generator.py
from __future__ import annotations

import argparse
import json
from pathlib import Path
from random import Random, SystemRandom
from typing import Dict, List

from enigma import Enigma, KeySetting
from plugboard import SLOTS
from utilities import STANDARD_CATALOGUE, WheelCatalogue

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(alpha: str, k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, SLOTS, len(alpha) // 2)
    pool = list(alpha)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def random_setting(
    rng: Random | SystemRandom,
    pairs: int = SLOTS,
    catalogue: WheelCatalogue = STANDARD_CATALOGUE,
) -> KeySetting:
    """Random rotor order, offsets and *pairs* plug pairs."""
    machine = Enigma.from_setting(KeySetting(tuple(catalogue.names[:3]), (0, 0, 0)), catalogue)
    machine.randomise(rng, catalogue)
    return machine.setting().with_pairs(choose_pairs(catalogue.alphabet, pairs, rng))


def setting_to_config(setting: KeySetting, turnovers=(0, 0, 0)) -> Dict:
    """JSON-ready dict in the layout main.load_config() expects."""
    return {
        "rotors": list(setting.order),
        "offsets": list(setting.offsets),
        "plugs": [p.one + p.two for p in setting.pairs if not p.is_identity],
        "turnovers": list(turnovers),
    }


def parse_cli() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a random machine key")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument(
        "--pairs",
        type=int,
        default=SLOTS,
        help=f"Number of plugboard pairs, 0–{SLOTS} (default: {SLOTS})",
    )
    p.add_argument(
        "--outfile",
        type=Path,
        default=Path("enigma_key.json"),
        help="Destination JSON file (default: enigma_key.json)",
    )
    return p.parse_args()


# ── main ─────────────────────────────────────────────────────────


def main() -> None:
    args = parse_cli()
    if not 0 <= args.pairs <= SLOTS:
        raise SystemExit(f"--pairs must be between 0 and {SLOTS}")

    rng = build_rng(args.seed)
    setting = random_setting(rng, args.pairs)
    cfg = setting_to_config(setting)

    args.outfile.write_text(json.dumps(cfg, indent=2), encoding="utf-8")
    print(f"✅  Wrote {args.outfile}\n"
        f"   rotors      : {'-'.join(setting.order)}\n"
        f"   offsets     : {'-'.join(str(o) for o in setting.offsets)}\n"
        f"   plug pairs  : {' '.join(cfg['plugs']) or '(none)'}")


if __name__ == "__main__":
    main()
