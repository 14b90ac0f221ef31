"""
Utility classes for reading and writing bit streams.
Bits are packed least significant bit first within every byte.
"""

# size of the intermediate I/O block, 256 KiB
BUF_SIZE = 262144


class BitCursor:
    """Position inside a byte buffer: byte pointer and bit offset."""

    __slots__ = ("ptr", "pos")

    def __init__(self, ptr=0, pos=0):
        self.ptr = ptr
        self.pos = pos

    def advance(self):
        """Move to the next bit, wrapping to the next byte after 8 bits."""
        self.pos += 1
        if self.pos > 7:
            self.pos = 0
            self.ptr += 1

    def reset(self):
        self.ptr = 0
        self.pos = 0

    def __repr__(self):
        return f"BitCursor(ptr={self.ptr}, pos={self.pos})"


def write_bit(buffer: bytearray, cursor: BitCursor, bit: int):
    """
    Append a single bit to a zero-filled buffer at the cursor.

    Args:
        buffer: The byte buffer
        cursor: The cursor, advanced by one bit
        bit: 0 or 1
    """
    if bit:
        buffer[cursor.ptr] |= 1 << cursor.pos
    cursor.advance()


def read_bit(buffer, cursor: BitCursor) -> int:
    """
    Extract the bit at the cursor.

    Args:
        buffer: The byte buffer
        cursor: The cursor, advanced by one bit

    Returns:
        0 or 1
    """
    bit = (buffer[cursor.ptr] >> cursor.pos) & 1
    cursor.advance()
    return bit


class BitInputStream:
    """A utility class for reading bit streams."""

    def __init__(self, in_stream, buffer_size=BUF_SIZE):
        """
        Create a new bit input stream.

        Args:
            in_stream: The input stream
            buffer_size: Number of bytes read from the stream at once
        """
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.in_stream = in_stream
        self.buffer_size = buffer_size
        self.count = 0
        self.block = b""
        self.cursor = BitCursor()

    def get_count(self):
        """
        Return the number of bytes read.

        Returns:
            The byte count
        """
        return self.count

    def _refill(self):
        self.block = self.in_stream.read(self.buffer_size)
        self.cursor.reset()
        if not self.block:
            raise EOFError("End of file reached")
        self.count += len(self.block)

    def read_bit(self):
        """
        Read a single bit.

        Returns:
            The bit value
        """
        if self.cursor.ptr >= len(self.block):
            self._refill()
        return read_bit(self.block, self.cursor)


class BitOutputStream:
    """A utility class for writing bit streams."""

    def __init__(self, out_stream, buffer_size=BUF_SIZE):
        """
        Create a new bit output stream.

        Args:
            out_stream: The output stream
            buffer_size: Size of the block flushed to the stream at once
        """
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.out_stream = out_stream
        self.count = 0
        self.block = bytearray(buffer_size)
        self.cursor = BitCursor()

    def get_count(self):
        """
        Return the number of bytes written.

        Returns:
            The byte count
        """
        return self.count

    def write_bit(self, bit):
        """
        Write a single bit, flushing the block once it is full.

        Args:
            bit: The bit value
        """
        write_bit(self.block, self.cursor, bit)
        if self.cursor.ptr >= len(self.block):
            self._flush_block()

    def write_bits(self, bits):
        """
        Write the given bit sequence in order.

        Args:
            bits: Iterable of 0/1 values, e.g. a bitarray
        """
        for bit in bits:
            self.write_bit(bit)

    def _flush_block(self):
        n = self.cursor.ptr
        if n:
            self.out_stream.write(bytes(self.block[:n]))
            self.count += n
            self.block[:n] = bytes(n)
        self.cursor.reset()

    def flush_bits(self):
        """Pad the partial byte with zero bits and flush the block."""
        if self.cursor.pos > 0:
            self.cursor.pos = 0
            self.cursor.ptr += 1
        self._flush_block()
