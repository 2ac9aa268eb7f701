import unittest
from random import Random

from enigma import Enigma, KeySetting, RotorSet
from plugboard import LetterPair, Plugboard
from utilities import STANDARD_CATALOGUE, preprocess_message

from samples import CIPHERTEXT, KEY, PLAINTEXT


def plain_machine(left=0, middle=0, right=0, order=("I", "II", "III")):
    return Enigma.from_setting(KeySetting(order, (left, middle, right)))


class RotorSetTests(unittest.TestCase):
    def test_right_wheel_cycle_moves_middle_once(self):
        machine = plain_machine()
        machine.encrypt("A" * 25)
        self.assertEqual(machine.rotors.offsets, (0, 0, 25))
        machine.encrypt("A")
        self.assertEqual(machine.rotors.offsets, (0, 1, 0))

    def test_middle_wheel_cycle_moves_left_once(self):
        machine = plain_machine()
        machine.encrypt("A" * (26 * 26 - 1))
        self.assertEqual(machine.rotors.offsets, (0, 0, 25))
        machine.encrypt("A")
        self.assertEqual(machine.rotors.offsets, (1, 0, 0))

    def test_custom_turnover_position(self):
        machine = plain_machine()
        machine.rotors.set_turnovers(0, 0, 5)
        machine.encrypt("AAAA")
        self.assertEqual(machine.rotors.offsets, (0, 0, 4))
        machine.encrypt("A")
        self.assertEqual(machine.rotors.offsets, (0, 1, 5))

    def test_no_double_step(self):
        machine = plain_machine(0, 0, 25)
        machine.rotors.set_turnovers(0, 1, 0)
        machine.encrypt("A")
        self.assertEqual(machine.rotors.offsets, (1, 1, 0))
        machine.encrypt("A")
        self.assertEqual(machine.rotors.offsets, (1, 1, 1))

    def test_set_offsets_validates_each_wheel(self):
        rotors = RotorSet(*(STANDARD_CATALOGUE.rotor(n) for n in ("I", "II", "III")))
        with self.assertRaises(ValueError):
            rotors.set_offsets(0, 26, 0)
        with self.assertRaises(ValueError):
            rotors.set_offsets(-1, 0, 0)
        rotors.set_offsets(3, 4, 5)
        self.assertEqual(rotors.offsets, (3, 4, 5))
        self.assertEqual(rotors.names, ("I", "II", "III"))


class EnigmaTests(unittest.TestCase):
    def test_short_golden_value(self):
        self.assertEqual(plain_machine().encrypt("HELLOWORLD"), "MQRAQUMIFY")

    def test_golden_ciphertext(self):
        machine = Enigma.from_setting(KEY)
        self.assertEqual(machine.encrypt(PLAINTEXT), CIPHERTEXT)

    def test_round_trip_after_rewind(self):
        machine = Enigma.from_setting(KEY)
        cipher = machine.encrypt(PLAINTEXT)
        machine.rewind()
        self.assertEqual(machine.decrypt(cipher), preprocess_message(PLAINTEXT))

    def test_round_trip_random_keys(self):
        rng = Random(1918)
        plain = preprocess_message(PLAINTEXT)[:200]
        for _ in range(20):
            order = tuple(rng.sample(STANDARD_CATALOGUE.names, 3))
            offsets = tuple(rng.randrange(26) for _ in range(3))
            letters = rng.sample(STANDARD_CATALOGUE.alphabet, 12)
            pairs = [letters[i] + letters[i + 1] for i in range(0, 12, 2)]
            setting = KeySetting(order, offsets).with_pairs(pairs)
            cipher = Enigma.from_setting(setting).encrypt(plain)
            self.assertEqual(Enigma.from_setting(setting).decrypt(cipher), plain)

    def test_no_letter_encrypts_to_itself(self):
        machine = Enigma.from_setting(KEY)
        plain = preprocess_message(PLAINTEXT)
        for p, c in zip(plain, machine.encrypt(plain)):
            self.assertNotEqual(p, c)

    def test_preprocessing_strips_non_letters(self):
        first = plain_machine().encrypt("Hello, World! 42")
        self.assertEqual(first, "MQRAQUMIFY")

    def test_setting_and_describe(self):
        machine = Enigma.from_setting(KEY)
        self.assertEqual(machine.setting(), KEY)
        self.assertEqual(machine.describe(), "II-I-III, 13-0-16, G-P M-X U-D N-K V-J A-A")
        self.assertEqual(
            KeySetting(("I", "II", "III"), (0, 0, 0)).describe(),
            "I-II-III, 0-0-0, A-A A-A A-A A-A A-A A-A",
        )

    def test_key_equality_ignores_slot_and_letter_order(self):
        self.assertEqual(KEY.with_pairs(["GP", "MX", "DU", "NK", "VJ", "EE"]), KEY)
        shuffled = KEY.with_pairs(["VJ", "NK", "DU", "XM", "PG"])
        self.assertEqual(shuffled, KEY)
        self.assertEqual(hash(shuffled), hash(KEY))
        self.assertNotEqual(KEY.with_pairs(["GP", "MX", "DU", "NK"]), KEY)
        self.assertNotEqual(KEY.with_pairs(["GP", "MX", "DU", "NK", "VA"]), KEY)

    def test_key_pads_pairs_to_six_slots(self):
        bare = KeySetting(("I", "II", "III"), (0, 0, 0))
        self.assertEqual(len(bare.pairs), 6)
        self.assertEqual(bare, Enigma.from_setting(bare).setting())
        with self.assertRaises(ValueError):
            bare.with_pairs(["AB", "CD", "EF", "GH", "IJ", "KL", "MN"])

    def test_key_setting_rejects_bad_offsets(self):
        with self.assertRaises(ValueError):
            KeySetting(("I", "II", "III"), (0, 0, 26))

    def test_unknown_rotor_name(self):
        with self.assertRaises(ValueError):
            Enigma.from_setting(KeySetting(("I", "II", "IV"), (0, 0, 0)))

    def test_copy_has_value_semantics(self):
        machine = Enigma.from_setting(KEY)
        twin = machine.copy()
        twin.encrypt("ABC")
        twin.plugboard.set_pair(5, LetterPair("E", "T"))
        self.assertEqual(machine.setting(), KEY)
        twin.rewind()
        self.assertEqual(twin.rotors.offsets, KEY.offsets)

    def test_randomise_keeps_plugboard(self):
        machine = Enigma(
            RotorSet(*(STANDARD_CATALOGUE.rotor(n) for n in ("I", "II", "III"))),
            Plugboard(["GP"]),
        )
        machine.randomise(Random(7))
        self.assertEqual(sorted(machine.rotors.names), ["I", "II", "III"])
        self.assertEqual(machine.plugboard.pair(0), LetterPair("G", "P"))
        machine.encrypt("ABCDEF")
        machine.rewind()
        self.assertEqual(machine.setting().offsets, machine._start)


if __name__ == "__main__":
    unittest.main()
