import unittest

from alphabets import ALPHABET
from plugboard import SLOTS, LetterPair, Plugboard


class LetterPairTests(unittest.TestCase):
    def test_parse_accepts_common_spellings(self):
        self.assertEqual(LetterPair.parse("GP"), LetterPair("G", "P"))
        self.assertEqual(LetterPair.parse("g-p"), LetterPair("G", "P"))
        self.assertEqual(LetterPair.parse(("m", "x")), LetterPair("M", "X"))
        with self.assertRaises(ValueError):
            LetterPair.parse("GPX")

    def test_identity_pair(self):
        self.assertTrue(LetterPair("A", "A").is_identity)
        self.assertFalse(LetterPair("A", "B").is_identity)
        self.assertEqual(str(LetterPair("U", "D")), "U-D")

    def test_pairs_are_unordered(self):
        self.assertEqual(LetterPair("G", "P"), LetterPair("P", "G"))
        self.assertEqual(hash(LetterPair("G", "P")), hash(LetterPair("P", "G")))
        self.assertEqual(LetterPair("A", "A"), LetterPair("E", "E"))
        self.assertNotEqual(LetterPair("G", "P"), LetterPair("G", "Q"))
        self.assertNotEqual(LetterPair("G", "P"), LetterPair("A", "A"))

    def test_encrypt_returns_partner(self):
        pair = LetterPair("U", "D")
        self.assertEqual(pair.encrypt("U"), "D")
        self.assertEqual(pair.encrypt("D"), "U")


class PlugboardTests(unittest.TestCase):
    def setUp(self):
        self.board = Plugboard(["GP", "MX", "UD", "NK", "VJ"])

    def test_empty_board_is_identity(self):
        board = Plugboard()
        for c in ALPHABET:
            self.assertEqual(board.encrypt(c), c)
            self.assertFalse(board.is_plugged(c))
        self.assertEqual(len(board.pairs), SLOTS)

    def test_swaps_plugged_letters_only(self):
        self.assertEqual(self.board.encrypt("G"), "P")
        self.assertEqual(self.board.encrypt("J"), "V")
        self.assertEqual(self.board.encrypt("E"), "E")
        self.assertTrue(self.board.is_plugged("K"))
        self.assertFalse(self.board.is_plugged("A"))

    def test_encrypt_is_an_involution(self):
        for c in ALPHABET:
            self.assertEqual(self.board.encrypt(self.board.encrypt(c)), c)

    def test_signal_path_matches_letter_path(self):
        for i, c in enumerate(ALPHABET):
            self.assertEqual(ALPHABET[self.board.forward(i)], self.board.encrypt(c))

    def test_identity_slot_does_not_shadow_a_real_pair(self):
        board = Plugboard(["AA", "AB"])
        self.assertEqual(board.encrypt("A"), "B")
        self.assertEqual(board.encrypt("B"), "A")
        self.assertEqual(board.forward(0), 1)

    def test_set_pair_replaces_slot(self):
        self.board.set_pair(0, LetterPair("E", "T"))
        self.assertEqual(self.board.pair(0), LetterPair("E", "T"))
        self.assertEqual(self.board.encrypt("E"), "T")
        self.assertEqual(self.board.encrypt("G"), "G")
        self.assertFalse(self.board.is_plugged("P"))

    def test_set_pair_rejects_bad_slot(self):
        with self.assertRaises(IndexError):
            self.board.set_pair(SLOTS, "AB")

    def test_too_many_pairs(self):
        with self.assertRaises(ValueError):
            Plugboard(["AB", "CD", "EF", "GH", "IJ", "KL", "MN"])

    def test_copy_is_independent(self):
        twin = self.board.copy()
        twin.set_pair(5, "ET")
        self.assertEqual(self.board.encrypt("E"), "E")
        self.assertNotEqual(twin, self.board)


if __name__ == "__main__":
    unittest.main()
