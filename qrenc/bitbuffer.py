#
# Bit level buffer used for assembling the QR-code bitstream. Bits live in
# 32 bit words, bit i is stored at word i // 32, position i % 32 (least
# significant bit first inside a word).
#

import numpy as np
from .exceptions import InvalidArgumentError, IndexOutOfRangeError


class BitBuffer(object):
    """
    Growable sequence of bits.

    Bits are appended at the end and can be read back with get(). The
    byte view produced by to_bytes() is MSB first, which is the order the
    QR-code standard uses for every field.
    """

    WORD_BITS = 32

    def __init__(self, size : int=0):
        if (size < 0):
            raise InvalidArgumentError(f"Negative size {size}")

        self.size = size
        self.bits_ = BitBuffer.make_array_(max(size, 1))

    @staticmethod
    def make_array_(size : int) -> np.ndarray:
        return np.zeros((size + 31) // 32, dtype=np.uint32)

    @property
    def size_in_bytes(self) -> int:
        return (self.size + 7) // 8

    def __len__(self):
        return self.size

    def __iter__(self):
        for i in range(self.size):
            yield self.get(i)

    #
    def ensure_capacity_(self, size : int):
        words = len(self.bits_)

        if (size > words * 32):
            # at least double so that appending stays amortized O(1)
            new_bits = BitBuffer.make_array_(max(size, words * 64))
            new_bits[:words] = self.bits_
            self.bits_ = new_bits

    def check_index_(self, i : int):
        if (i < 0 or i >= self.size):
            raise IndexOutOfRangeError(f"Bit index {i} outside of 0..{self.size - 1}")

    #
    def get(self, i : int) -> bool:
        self.check_index_(i)
        return (int(self.bits_[i >> 5]) >> (i & 0x1F)) & 1 == 1

    def set(self, i : int):
        self.check_index_(i)
        self.bits_[i >> 5] |= np.uint32(1 << (i & 0x1F))

    def flip(self, i : int):
        self.check_index_(i)
        self.bits_[i >> 5] ^= np.uint32(1 << (i & 0x1F))

    #
    def range_masks_(self, start : int, end : int):
        """Yields (word index, mask) pairs covering bits start..end-1."""
        if (end < start or start < 0 or end > self.size):
            raise InvalidArgumentError(f"Bad range {start}..{end} for size {self.size}")

        if (end == start):
            return

        # treat end as the last actually used bit
        end -= 1
        first_word = start // 32
        last_word = end // 32

        for i in range(first_word, last_word + 1):
            first_bit = 0 if i > first_word else start & 0x1F
            last_bit = 31 if i < last_word else end & 0x1F
            # ones from first_bit to last_bit, inclusive
            yield i, (2 << last_bit) - (1 << first_bit)

    def set_range(self, start : int, end : int):
        """Sets bits start (inclusive) to end (exclusive)."""
        for i, mask in self.range_masks_(start, end):
            self.bits_[i] |= np.uint32(mask)

    def is_range(self, start : int, end : int, value : bool) -> bool:
        """
        Checks whether every bit in start..end-1 is set (value True) or
        clear (value False). An empty range always matches.
        """
        for i, mask in self.range_masks_(start, end):
            if (int(self.bits_[i]) & mask != (mask if value else 0)):
                return False

        return True

    def clear(self):
        self.bits_[:] = 0

    #
    def append_bit(self, bit : bool):
        self.ensure_capacity_(self.size + 1)

        if (bit):
            self.bits_[self.size >> 5] |= np.uint32(1 << (self.size & 0x1F))

        self.size += 1

    def append_bits(self, value : int, num_bits : int):
        """
        Appends the num_bits least significant bits of value, most
        significant first. Appending 6 bits of 0x1e gives 0,1,1,1,1,0.
        """
        if (num_bits < 0 or num_bits > 32):
            raise InvalidArgumentError("Num bits must be between 0 and 32")

        self.ensure_capacity_(self.size + num_bits)

        for left in range(num_bits, 0, -1):
            self.append_bit((value >> (left - 1)) & 0x01 == 1)

    def append_buffer(self, other : "BitBuffer"):
        self.ensure_capacity_(self.size + other.size)

        for i in range(other.size):
            self.append_bit(other.get(i))

    def xor(self, other : "BitBuffer"):
        if (self.size != other.size):
            raise InvalidArgumentError("Sizes don't match")

        # the last word may be partially used, 0 ^ 0 keeps the tail clean
        words = (self.size + 31) // 32
        self.bits_[:words] ^= other.bits_[:words]

    #
    def to_bytes(self, bit_offset : int, num_bytes : int) -> bytearray:
        """
        Returns num_bytes bytes starting at bit_offset. Each byte is
        filled most significant bit first.
        """
        result = bytearray(num_bytes)

        for i in range(num_bytes):
            byte = 0

            for j in range(8):
                if (self.get(bit_offset)):
                    byte |= 1 << (7 - j)

                bit_offset += 1

            result[i] = byte

        return result

    def __eq__(self, other):
        if (not isinstance(other, BitBuffer)):
            return NotImplemented

        words = (self.size + 31) // 32
        return self.size == other.size and np.array_equal(self.bits_[:words], other.bits_[:words])

    __hash__ = None

    def __str__(self):
        out = []

        for i in range(self.size):
            if (i & 0x07 == 0):
                out.append(" ")

            out.append("X" if self.get(i) else ".")

        return "".join(out)

    def __repr__(self):
        return f"BitBuffer(size={self.size})"
