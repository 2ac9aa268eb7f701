# main.py
from __future__ import annotations

import argparse, json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List

from cracker import CrackConfig, crack_message, crack_messages
from debug import Debug
from enigma import Enigma, KeySetting
from plugboard import LetterPair
from scoring import FrequencyTable, match_rate, same_key
from utilities import STANDARD_CATALOGUE, format_blocks, load_messages, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(slots=True)
class Config:
    """Presentation switches for the command line."""

    block: int = 5                  # display block size
    bigrams: Path = DATA_DIR / "english_bigrams.csv"
    trigrams: Path = DATA_DIR / "english_trigrams.csv"


# ────────────────────────────────────────────────────────────────────────
#  1. Key file helpers
# ────────────────────────────────────────────────────────────────────────


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    required = {"rotors", "offsets", "plugs"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    if len(data["rotors"]) != 3 or len(data["offsets"]) != 3:
        raise ValueError("Config needs exactly three rotors and three offsets")
    return data


def machine_from_config(cfg: dict) -> Enigma:
    """Build a machine from a loaded key dictionary."""
    setting = KeySetting(
        tuple(name.upper() for name in cfg["rotors"]),
        tuple(int(o) for o in cfg["offsets"]),
        tuple(LetterPair.parse(p) for p in cfg["plugs"]),
    )
    machine = Enigma.from_setting(setting, STANDARD_CATALOGUE)
    turnovers = cfg.get("turnovers")
    if turnovers:
        machine.rotors.set_turnovers(*(int(t) for t in turnovers))
    return machine


def read_text(args: argparse.Namespace) -> str:
    """Message text from -m, or one line of a corpus file."""
    if args.message is not None:
        return args.message
    if args.corpus is not None:
        messages = load_messages(args.corpus)
        try:
            return messages[args.index]
        except IndexError:
            raise ValueError(f"{args.corpus} holds {len(messages)} messages, no index {args.index}")
    raise ValueError("Give a message with -m or a corpus with --corpus")


def load_table(args: argparse.Namespace, cfg: Config) -> FrequencyTable:
    path = args.table or (cfg.trigrams if args.trigrams else cfg.bigrams)
    return FrequencyTable.from_csv(path)


# ────────────────────────────────────────────────────────────────────────
#  2. Commands
# ────────────────────────────────────────────────────────────────────────


def cmd_encrypt(args: argparse.Namespace, cfg: Config) -> None:
    machine = machine_from_config(load_config(args.config))
    setting = machine.setting()
    cipher = machine.encrypt(read_text(args))
    print("Setting  :", setting.describe())
    print("Encrypted:", format_blocks(cipher, cfg.block))


def cmd_decrypt(args: argparse.Namespace, cfg: Config) -> None:
    machine = machine_from_config(load_config(args.config))
    print("Decrypted:", format_blocks(machine.decrypt(read_text(args)), cfg.block))


def _report(machines: List[Enigma], ciphertext: str, cfg: Config) -> None:
    if not machines:
        print("No key found.")
        return
    for machine in machines:
        print("setting found =", machine.describe())
    for machine in machines:
        machine.rewind()
        print("potential cracked message =", format_blocks(machine.decrypt(ciphertext), cfg.block))


def cmd_crack(args: argparse.Namespace, cfg: Config) -> None:
    table = load_table(args, cfg)
    ciphertext = preprocess_message(read_text(args))
    start = time.perf_counter()
    machines = crack_message(ciphertext, table, CrackConfig(workers=args.workers))
    debug.info("search", f"time taken to crack = {time.perf_counter() - start:.1f} s")
    _report(machines, ciphertext, cfg)


def cmd_crack_pair(args: argparse.Namespace, cfg: Config) -> None:
    table = load_table(args, cfg)
    first, second = (preprocess_message(t) for t in args.ciphertexts)
    start = time.perf_counter()
    machines = crack_messages(first, second, table, CrackConfig(workers=args.workers))
    debug.info("search", f"time taken to crack = {time.perf_counter() - start:.1f} s")
    _report(machines, first + second, cfg)


def cmd_samekey(args: argparse.Namespace, cfg: Config) -> None:
    first, second = (preprocess_message(t) for t in args.ciphertexts)
    rate = match_rate(first, second)
    verdict = "same key" if same_key(first, second) else "different keys"
    print(f"match rate {rate:.4f} → {verdict}")


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Three-rotor cipher machine and ciphertext-only cracker")
    p.add_argument("-v", "--verbose", action="store_true", help="Log search and hill-climb details.")
    p.add_argument("--log-file", metavar="FILE", help="Also write log lines to FILE.")
    sub = p.add_subparsers(dest="command", required=True)

    def add_text_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("-m", "--message", metavar="TEXT", help="Text to process.")
        sp.add_argument("--corpus", metavar="FILE", help="Read messages from FILE, one per line.")
        sp.add_argument("--index", type=int, default=0, help="Which corpus message to use (default 0).")

    def add_crack_options(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--workers", type=int, default=CrackConfig().workers,
                        help="Worker processes for the search (default: CPU count).")
        sp.add_argument("--trigrams", action="store_true", help="Score the plugboard with trigrams instead of bigrams.")
        sp.add_argument("--table", metavar="CSV", help="Custom ngram,count frequency table.")

    for name, helptext in (("encrypt", "Encrypt with a JSON key file."),
                           ("decrypt", "Decrypt with a JSON key file.")):
        sp = sub.add_parser(name, help=helptext)
        sp.add_argument("--config", metavar="FILE", required=True, help="JSON key file.")
        add_text_source(sp)

    sp = sub.add_parser("crack", help="Recover the key of one ciphertext.")
    add_text_source(sp)
    add_crack_options(sp)

    sp = sub.add_parser("crack-pair", help="Recover the key shared by two ciphertexts.")
    sp.add_argument("ciphertexts", nargs=2, metavar="CIPHERTEXT")
    add_crack_options(sp)

    sp = sub.add_parser("samekey", help="Test whether two ciphertexts share a key.")
    sp.add_argument("ciphertexts", nargs=2, metavar="CIPHERTEXT")

    return p.parse_args(argv)


COMMANDS: Dict[str, Callable[[argparse.Namespace, Config], None]] = {
    "encrypt": cmd_encrypt,
    "decrypt": cmd_decrypt,
    "crack": cmd_crack,
    "crack-pair": cmd_crack_pair,
    "samekey": cmd_samekey,
}


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    Debug.configure(
        verbose=("search", "hillclimb", "loader") if args.verbose else (),
        log_file=args.log_file,
    )

    try:
        COMMANDS[args.command](args, Config())
    except (ValueError, OSError) as exc:
        raise SystemExit(f"❌  {exc}")


if __name__ == "__main__":
    main()
