"""
Sequential bit reader for decoding packed records.

This module provides sequential bit-level reading from an immutable byte
buffer, used by the field walker and by custom decoders.

Bit Ordering:
Bits are read LSB-first, starting at the lowest bit of the first byte:
- First bit read is bit position 0 (LSB) of byte 0
- Ninth bit read is bit position 0 of byte 1
- Each bit read becomes the next higher-order bit of the result

So a 3-bit read followed by a 5-bit read splits 0b01000101 into 0b101 and
0b01000. Multi-byte reads through read_bits() therefore come out
little-endian. read_uint() is the separate whole-byte path for values
stored most-significant byte first.
"""

from bitbuffer.errors import OutOfData

# Widest single read, matching a 64-bit accumulator
MAX_READ_BITS = 64


class BitReader:
    """Sequential LSB-first bit reader over immutable bytes."""

    def __init__(self, data: bytes) -> None:
        """
        Initialize a bit reader.

        Args:
            data: Bytes to read from (any bytes-like object or
                iterable of ints in 0-255)

        Raises:
            TypeError: If data is an int
        """
        if isinstance(data, int):
            raise TypeError(f"expected bytes-like data, got int {data!r}")
        self._data = bytes(data)
        self._total_bits = len(self._data) * 8
        self._position = 0

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"BitReader(position={self._position}, remaining={self.remaining})"

    @property
    def position(self) -> int:
        """Number of bits consumed so far."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of bits remaining to read."""
        return self._total_bits - self._position

    def peek_bits(self, num_bits: int) -> int:
        """
        Read bits as an integer without consuming them.

        Args:
            num_bits: Number of bits to read (0-64)

        Returns:
            Integer value of the bits, LSB-first

        Raises:
            ValueError: If num_bits is outside 0-64
            OutOfData: If not enough bits are available
        """
        if num_bits < 0 or num_bits > MAX_READ_BITS:
            raise ValueError(f"num_bits must be 0-{MAX_READ_BITS}, got {num_bits}")

        if num_bits > self.remaining:
            raise OutOfData(num_bits, self.remaining, self._position)

        result = 0
        shift = 0
        pos = self._position
        while shift < num_bits:
            byte_index = pos // 8
            bit_index = pos % 8

            # Take as many bits as this byte still holds
            take = min(8 - bit_index, num_bits - shift)
            chunk = (self._data[byte_index] >> bit_index) & ((1 << take) - 1)
            result |= chunk << shift

            shift += take
            pos += take

        return result

    def read_bits(self, num_bits: int) -> int:
        """
        Read and consume multiple bits as an integer.

        The position is left unchanged if the read fails.

        Args:
            num_bits: Number of bits to read (0-64)

        Returns:
            Integer value of the bits, LSB-first

        Raises:
            ValueError: If num_bits is outside 0-64
            OutOfData: If not enough bits are available
        """
        value = self.peek_bits(num_bits)
        self._position += num_bits
        return value

    def read_bit(self) -> int:
        """Read and consume a single bit."""
        return self.read_bits(1)

    def read_bool(self) -> bool:
        """Read a single bit as a boolean."""
        return self.read_bits(1) != 0

    def read_uint8(self) -> int:
        """Read the next 8 bits as an unsigned byte."""
        return self.read_bits(8)

    def skip_bits(self, num_bits: int) -> None:
        """
        Consume bits without decoding them.

        Args:
            num_bits: Number of bits to skip (any non-negative count)

        Raises:
            ValueError: If num_bits is negative
            OutOfData: If not enough bits are available
        """
        if num_bits < 0:
            raise ValueError(f"num_bits must not be negative, got {num_bits}")
        if num_bits > self.remaining:
            raise OutOfData(num_bits, self.remaining, self._position)
        self._position += num_bits

    def read_bytes(self, num_bytes: int) -> bytes:
        """
        Read whole bytes.

        Each byte is the next 8 bits of the stream, so on a byte boundary
        the input bytes come back unchanged.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            The bytes read

        Raises:
            ValueError: If num_bytes is negative
            OutOfData: If not enough bits are available
        """
        if num_bytes < 0:
            raise ValueError(f"num_bytes must not be negative, got {num_bytes}")

        num_bits = num_bytes * 8
        if num_bits > self.remaining:
            raise OutOfData(num_bits, self.remaining, self._position)

        if self._position % 8 == 0:
            start = self._position // 8
            self._position += num_bits
            return self._data[start : start + num_bytes]

        return bytes(self.read_bits(8) for _ in range(num_bytes))

    def read_uint(self, num_bytes: int, byteorder: str = "big") -> int:
        """
        Read a whole-byte unsigned integer.

        Args:
            num_bytes: Width of the integer in bytes (e.g. 2, 4, 8)
            byteorder: "big" (most significant byte first) or "little"

        Returns:
            The unsigned integer value

        Raises:
            OutOfData: If not enough bits are available
        """
        return int.from_bytes(self.read_bytes(num_bytes), byteorder)
