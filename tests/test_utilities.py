import os
import tempfile
import unittest

from utilities import STANDARD_CATALOGUE, WheelCatalogue, format_blocks, load_messages, preprocess_message


class TextTests(unittest.TestCase):
    def test_preprocess_message(self):
        self.assertEqual(preprocess_message("Attack at dawn, 0600!"), "ATTACKATDAWN")
        self.assertEqual(preprocess_message("1234 ..."), "")

    def test_format_blocks(self):
        self.assertEqual(format_blocks("ABCDEFGHIJKL"), "ABCDE FGHIJ KL")
        self.assertEqual(format_blocks("ABCDEF", 3), "ABC DEF")
        self.assertEqual(format_blocks(""), "")

    def test_load_messages_drops_indicator(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "intercepts.txt")
            with open(path, "w", encoding="utf-8") as fh:
                fh.write("QWERTY hello world\n\nasdfgh second one\n")
            self.assertEqual(load_messages(path), ["HELLOWORLD", "SECONDONE"])
            self.assertEqual(load_messages(path, skip=0)[1], "ASDFGHSECONDONE")


class CatalogueTests(unittest.TestCase):
    def test_standard_catalogue(self):
        self.assertEqual(STANDARD_CATALOGUE.names, ["I", "II", "III"])
        self.assertEqual(len(STANDARD_CATALOGUE.orders()), 6)
        self.assertEqual(STANDARD_CATALOGUE.wiring("ii"), "UPHZLWEQMTDJXCAKSOIGVBYFNR")

    def test_rotors_are_fresh(self):
        a = STANDARD_CATALOGUE.rotor("I")
        b = STANDARD_CATALOGUE.rotor("I")
        a.step()
        self.assertEqual(b.position, 0)
        self.assertEqual(a.name, "I")

    def test_unknown_rotor(self):
        with self.assertRaises(ValueError):
            STANDARD_CATALOGUE.rotor("VIII")

    def test_bad_wiring_fails_on_construction(self):
        with self.assertRaises(ValueError):
            WheelCatalogue(rotors=(("X", "ABC"),), reflector=STANDARD_CATALOGUE.reflector)


if __name__ == "__main__":
    unittest.main()
