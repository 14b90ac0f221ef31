"""
Huffman archive format: header, serialized tree and bit-packed payload.
"""
import struct
import sys

from bit_streaming import BUF_SIZE, BitInputStream, BitOutputStream
from compressor_ABC import Compressor
from frequency_table import N_SYMBOLS, count_and_rewind
from huffman_coding import ROOT, TREE_SIZE, HuffmanTree

MAGIC = b"HFMN"

# magic(4) original length(i64), native byte order
HEADER_FMT = "=4sq"
HEADER_SIZE = struct.calcsize(HEADER_FMT)
# left(i16) right(i16) for each internal node
NODE_FMT = "=hh"
NODE_SIZE = struct.calcsize(NODE_FMT)
TABLE_SIZE = NODE_SIZE * (TREE_SIZE - N_SYMBOLS)


class ArchiveError(ValueError):
    """Base class for malformed archives."""


class ArchiveFormatError(ArchiveError):
    """Input is not a recognized huffman archive."""


class IncompleteArchiveError(ArchiveError):
    """Archive ends before the declared data is complete."""


def write_header(f, length: int, tree: HuffmanTree):
    f.write(struct.pack(HEADER_FMT, MAGIC, length))
    for l, r in tree.to_table():
        f.write(struct.pack(NODE_FMT, l, r))
    return HEADER_SIZE + TABLE_SIZE


def _read_exact(f, n):
    """Reads n bytes, fewer only if the stream ends first."""
    data = bytearray()
    while len(data) < n:
        chunk = f.read(n - len(data))
        if not chunk:
            break
        data += chunk
    return bytes(data)


def read_header(f):
    """
    Reads magic, original length and the tree table.

    Returns:
        Tuple (original length, HuffmanTree)
    """
    magic = _read_exact(f, len(MAGIC))
    if magic != MAGIC:
        raise ArchiveFormatError("Not a huffman archive")

    data = _read_exact(f, HEADER_SIZE - len(MAGIC))
    if len(data) != HEADER_SIZE - len(MAGIC):
        raise IncompleteArchiveError("Malformed stream: header too short")
    _, length = struct.unpack(HEADER_FMT, magic + data)
    if length < 0:
        raise ArchiveFormatError(f"Invalid original length: {length}")

    table = _read_exact(f, TABLE_SIZE)
    if len(table) != TABLE_SIZE:
        raise IncompleteArchiveError("Malformed stream: huffman table too short")
    try:
        tree = HuffmanTree.from_table(struct.iter_unpack(NODE_FMT, table))
    except ValueError as e:
        raise ArchiveFormatError(f"Invalid huffman table: {e}") from e
    return length, tree


class HuffmanCompressor(Compressor):
    """
    Static two-pass Huffman compressor.
    """

    def __init__(self, buffer_size: int = BUF_SIZE, verbose: bool = False):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.buffer_size = buffer_size
        self.verbose = verbose
        self.log = []

    def _stage(self, message):
        if self.verbose:
            print(message, end="", file=sys.stderr, flush=True)

    def _done(self, message="OK"):
        if self.verbose:
            print(message, file=sys.stderr)

    def compress(self, input_stream, output_stream) -> str:
        """
        Counts the input, builds the tree and writes the archive.
        Returns log information.
        """
        self.log.clear()

        self._stage("Preparing... ")
        table, source = count_and_rewind(input_stream, self.buffer_size)
        self._done()

        self._stage("Building huffman tree... ")
        tree = HuffmanTree.build_from_freq(table)
        codes = tree.codes
        self._done()

        self._stage("Writing resulting archive... ")
        header_size = write_header(output_stream, table.total, tree)

        writer = BitOutputStream(output_stream, self.buffer_size)
        while True:
            chunk = source.read(self.buffer_size)
            if not chunk:
                break
            for c in chunk:
                writer.write_bits(codes[c])
        writer.flush_bits()
        if source is not input_stream:
            source.close()
        self._done("DONE")

        original_size = table.total
        final_size = header_size + writer.get_count()
        self.log.append(f"Original size: {original_size} bytes")
        self.log.append(f"Archive size: {final_size} bytes")
        diff = original_size - final_size
        if diff > 0:
            ratio = diff / original_size * 100
            self.log.append(f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)")
        else:
            self.log.append(f"Size increased by {-diff} bytes")

        return '\n'.join(self.log)

    def decompress(self, input_stream, output_stream) -> str:
        """
        Restores the original bytes of an archive.
        Returns log information.

        Raises:
            ArchiveFormatError: the input is not an archive
            IncompleteArchiveError: the archive is truncated, the restored
                prefix is still written to output_stream
        """
        self.log.clear()

        self._stage("Reading archive header... ")
        length, tree = read_header(input_stream)
        self._done()

        self._stage("Extracting... ")
        reader = BitInputStream(input_stream, self.buffer_size)
        block = bytearray()
        decoded = 0
        truncated = False
        v = ROOT
        while decoded < length:
            try:
                bit = reader.read_bit()
            except EOFError:
                truncated = True
                break
            v = tree.decode_step(v, bit)
            if v < N_SYMBOLS:
                block.append(v)
                decoded += 1
                v = ROOT
                if len(block) >= self.buffer_size:
                    output_stream.write(bytes(block))
                    block.clear()
        if block:
            output_stream.write(bytes(block))

        if truncated:
            self._done("FAILED")
            raise IncompleteArchiveError(
                f"Archive is incomplete: restored {decoded} of {length} bytes"
            )
        self._done("DONE")

        archive_size = HEADER_SIZE + TABLE_SIZE + reader.get_count()
        self.log.append(f"Archive size: {archive_size} bytes")
        self.log.append(f"Restored size: {decoded} bytes")
        diff = decoded - archive_size
        if diff > 0:
            self.log.append(f"Size increased by {diff} bytes")
        else:
            self.log.append(f"Size reduced by {-diff} bytes")

        return '\n'.join(self.log)
