import array
import logging
from typing import Iterator, List


logger = logging.getLogger(__name__)

CHUNK_BITS = 64
CHUNK_MASK = (1 << CHUNK_BITS) - 1


class BitVector:
    """Fixed-capacity bit set packed into 64-bit chunks.

    Bits outside ``[0, size)`` are never readable or writable; padding bits in
    the top chunk are always kept at zero so that counts stay exact.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self.size = size
        self.word_count = max(1, (size + CHUNK_BITS - 1) // CHUNK_BITS)
        self.bitmap = array.array("Q")  # 64-bit integers
        self.bitmap.extend([0] * self.word_count)

    @classmethod
    def full(cls, size: int) -> "BitVector":
        """Vector of ``size`` bits, all set."""
        vector = cls(size)
        vector.invert()
        return vector

    @classmethod
    def from_indices(cls, size: int, indices) -> "BitVector":
        vector = cls(size)
        for index in indices:
            vector.set_bit(index)
        return vector

    def _check(self, index: int):
        if not 0 <= index < self.size:
            raise IndexError(f"bit index {index} out of range for size {self.size}")

    def _top_mask(self) -> int:
        tail = self.size % CHUNK_BITS
        if tail == 0:
            return CHUNK_MASK if self.size else 0
        return (1 << tail) - 1

    def set_bit(self, index: int):
        self._check(index)
        self.bitmap[index // CHUNK_BITS] |= (1 << (index % CHUNK_BITS))

    def clear_bit(self, index: int):
        self._check(index)
        self.bitmap[index // CHUNK_BITS] &= CHUNK_MASK ^ (1 << (index % CHUNK_BITS))

    def get_bit(self, index: int) -> int:
        self._check(index)
        return (self.bitmap[index // CHUNK_BITS] >> (index % CHUNK_BITS)) & 1

    def set_range(self, lo: int, hi: int):
        """Set every bit in the inclusive range ``[lo, hi]``."""
        for i in range(lo, hi + 1):
            self.set_bit(i)

    def clear_range(self, lo: int, hi: int):
        """Clear every bit in the inclusive range ``[lo, hi]``."""
        for i in range(lo, hi + 1):
            self.clear_bit(i)

    def resize(self, size: int):
        """Grow the vector to ``size`` bits; new bits are zero."""
        if size < self.size:
            raise ValueError(f"cannot shrink vector from {self.size} to {size}")
        new_word_count = max(1, (size + CHUNK_BITS - 1) // CHUNK_BITS)
        self.bitmap.extend([0] * (new_word_count - self.word_count))
        self.word_count = new_word_count
        self.size = size

    def is_zero(self) -> bool:
        return not any(self.bitmap)

    def invert(self):
        """Complement every bit within the declared size, in place."""
        for i in range(self.word_count):
            self.bitmap[i] = CHUNK_MASK ^ self.bitmap[i]
        self.bitmap[-1] &= self._top_mask()

    def cardinality(self) -> int:
        return sum(bin(word).count("1") for word in self.bitmap)

    def first_set_index(self) -> int:
        """Index of the lowest set bit."""
        for k, word in enumerate(self.bitmap):
            if word:
                return k * CHUNK_BITS + ((word & -word).bit_length() - 1)
        raise ValueError("first_set_index() on an all-zero vector")

    def indices(self) -> Iterator[int]:
        """Iterate over the indices of set bits in ascending order."""
        for k, word in enumerate(self.bitmap):
            while word:
                low = word & -word
                yield k * CHUNK_BITS + low.bit_length() - 1
                word ^= low

    def copy(self) -> "BitVector":
        result = BitVector(self.size)
        result.bitmap = array.array("Q", self.bitmap)
        return result

    # Binary operations work over the shorter of the two vectors; bits past
    # that boundary are masked off so they cannot influence the result.

    def _combine(self, other: "BitVector", op) -> "BitVector":
        size = min(self.size, other.size)
        if self.size != other.size:
            logger.debug(f"Combining vectors of different sizes ({self.size}, {other.size}); truncating to {size}")
        result = BitVector(size)
        for i in range(result.word_count):
            result.bitmap[i] = op(self.bitmap[i], other.bitmap[i]) & CHUNK_MASK
        result.bitmap[-1] &= result._top_mask()
        return result

    def union(self, other: "BitVector") -> "BitVector":
        return self._combine(other, lambda a, b: a | b)

    def intersection(self, other: "BitVector") -> "BitVector":
        return self._combine(other, lambda a, b: a & b)

    def symmetric_difference(self, other: "BitVector") -> "BitVector":
        return self._combine(other, lambda a, b: a ^ b)

    def equals(self, other: "BitVector") -> bool:
        return self.symmetric_difference(other).is_zero()

    def issuperset(self, other: "BitVector") -> bool:
        return self.union(other).equals(self)

    def to_hex(self) -> str:
        return "[" + ",".join(format(word, "x") for word in self.bitmap) + "]"

    def to_binary(self) -> str:
        """Bits in index order, lowest index first."""
        return "".join(str(self.get_bit(i)) for i in range(self.size))

    def to_list(self) -> List[int]:
        return list(self.indices())

    __or__ = union
    __and__ = intersection
    __xor__ = symmetric_difference

    def __invert__(self) -> "BitVector":
        result = self.copy()
        result.invert()
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.size == other.size and self.equals(other)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[int]:
        return self.indices()

    def __repr__(self) -> str:
        return f"BitVector(size={self.size}, bits={self.to_list()})"
