import unittest

from qm_cover import BitVector, compare_terms, sort_term, sort_terms, term_key


class TestBitVector(unittest.TestCase):
    def test_set_get_round_trip(self):
        for size in (1, 63, 64, 65, 130):
            vector = BitVector(size)
            for i in range(size):
                vector.set_bit(i)
                self.assertEqual(vector.get_bit(i), 1)
                vector.clear_bit(i)
                self.assertEqual(vector.get_bit(i), 0)
            self.assertTrue(vector.is_zero())

    def test_out_of_range_access(self):
        vector = BitVector(10)
        with self.assertRaises(IndexError):
            vector.get_bit(10)
        with self.assertRaises(IndexError):
            vector.set_bit(-1)
        # Reading never changes the size
        self.assertEqual(len(vector), 10)

    def test_resize(self):
        vector = BitVector(10)
        vector.set_bit(3)
        vector.resize(100)
        vector.set_bit(99)
        self.assertEqual(vector.to_list(), [3, 99])
        with self.assertRaises(ValueError):
            vector.resize(50)

    def test_invert_masks_padding(self):
        vector = BitVector(70)
        vector.invert()
        self.assertEqual(vector.cardinality(), 70)
        self.assertEqual(BitVector.full(65).cardinality(), 65)
        self.assertTrue(BitVector.full(0).is_zero())

    def test_ranges(self):
        vector = BitVector(130)
        vector.set_range(3, 66)
        self.assertEqual(vector.cardinality(), 64)
        vector.clear_range(10, 20)
        self.assertEqual(vector.cardinality(), 53)
        self.assertEqual(vector.get_bit(15), 0)

    def test_first_set_index(self):
        vector = BitVector(130)
        vector.set_bit(100)
        vector.set_bit(129)
        self.assertEqual(vector.first_set_index(), 100)
        with self.assertRaises(ValueError):
            BitVector(5).first_set_index()

    def test_algebraic_laws(self):
        a = BitVector.from_indices(90, [0, 5, 64, 89])
        b = BitVector.from_indices(90, [5, 6, 70])
        c = BitVector.from_indices(90, [0, 70, 88])

        self.assertEqual(a | b, b | a)
        self.assertEqual(a & b, b & a)
        self.assertEqual((a | b) | c, a | (b | c))
        self.assertEqual((a & b) & c, a & (b & c))
        self.assertEqual(a & a, a)
        self.assertEqual(a | ~a, BitVector.full(90))
        self.assertTrue((a ^ a).is_zero())
        self.assertEqual((a ^ b).to_list(), [0, 6, 64, 70, 89])

    def test_results_are_independent(self):
        a = BitVector.from_indices(8, [1])
        b = BitVector.from_indices(8, [2])
        union = a.union(b)
        union.set_bit(7)
        self.assertEqual(a.to_list(), [1])
        self.assertEqual(b.to_list(), [2])

        copy = a.copy()
        copy.clear_bit(1)
        self.assertEqual(a.get_bit(1), 1)

    def test_mismatched_sizes_use_shorter_vector(self):
        long = BitVector.from_indices(70, [1, 66])
        short = BitVector.from_indices(65, [1])
        union = long.union(short)
        self.assertEqual(len(union), 65)
        self.assertEqual(union.to_list(), [1])
        self.assertTrue(long.symmetric_difference(short).is_zero())
        self.assertTrue(long.equals(short))
        # Operator equality also compares the declared size
        self.assertNotEqual(long, short)

    def test_superset(self):
        big = BitVector.from_indices(10, [1, 2, 3])
        small = BitVector.from_indices(10, [2])
        self.assertTrue(big.issuperset(small))
        self.assertFalse(small.issuperset(big))
        self.assertTrue(small.issuperset(BitVector(10)))

    def test_renderings(self):
        vector = BitVector.from_indices(8, [0, 1, 2, 3])
        self.assertEqual(vector.to_hex(), "[f]")
        self.assertEqual(BitVector.from_indices(4, [1]).to_binary(), "0100")
        self.assertEqual(list(BitVector.from_indices(200, [150, 3, 64])), [3, 64, 150])


class TestOrdering(unittest.TestCase):
    def test_case_insensitive_first(self):
        self.assertLess(compare_terms("ab", "aC"), 0)
        self.assertGreater(compare_terms("B", "a"), 0)

    def test_uppercase_before_lowercase(self):
        self.assertEqual(compare_terms("A", "a"), -1)
        self.assertEqual(compare_terms("bc", "BC"), 1)

    def test_letters_sorted_within_term(self):
        self.assertEqual(compare_terms("ba", "ab"), 0)
        self.assertEqual(sort_term("cBa"), "aBc")

    def test_prefix_sorts_first(self):
        self.assertEqual(compare_terms("a", "ab"), -1)
        self.assertEqual(compare_terms("abc", "ab"), 1)

    def test_empty_terms(self):
        self.assertEqual(compare_terms("", "a"), -1)
        self.assertEqual(compare_terms(None, "A"), -1)
        self.assertEqual(compare_terms("a", ""), 1)
        self.assertEqual(compare_terms("", ""), 0)
        self.assertEqual(term_key(None), ())

    def test_sort_terms(self):
        self.assertEqual(sort_terms(["bc", "BC", "ab"]), ["ab", "BC", "bc"])
        self.assertEqual(sort_terms(["ab", "", "Ab", "a"]), ["", "Ab", "a", "ab"])


if __name__ == "__main__":
    unittest.main()
