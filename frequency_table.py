"""
Byte frequency analysis for the Huffman archiver
"""

import tempfile
from collections import Counter

from bit_streaming import BUF_SIZE

N_SYMBOLS = 256


class FrequencyTable:
    """
    Occurrence count of each of the 256 byte values
    together with the total number of bytes counted.
    """

    def __init__(self, counts=None):
        if counts is None:
            counts = [0] * N_SYMBOLS
        if len(counts) != N_SYMBOLS:
            raise ValueError(f"Expected {N_SYMBOLS} counts, got {len(counts)}")
        self.counts = list(counts)
        self.total = sum(self.counts)

    def update(self, chunk: bytes):
        """
        Add the bytes of chunk to the table.

        :param chunk: bytes, next portion of the source
        """
        for symbol, freq in Counter(chunk).items():
            self.counts[symbol] += freq
        self.total += len(chunk)

    @classmethod
    def from_bytes(cls, data: bytes) -> "FrequencyTable":
        table = cls()
        table.update(data)
        return table

    @classmethod
    def from_stream(cls, stream, buffer_size=BUF_SIZE, copy_to=None) -> "FrequencyTable":
        """
        Count every byte of stream until it is exhausted.

        :param stream: readable binary stream
        :param buffer_size: int, bytes read at once
        :param copy_to: optional writable stream receiving a copy of the data
        :return: FrequencyTable
        """
        table = cls()
        while True:
            chunk = stream.read(buffer_size)
            if not chunk:
                break
            table.update(chunk)
            if copy_to is not None:
                copy_to.write(chunk)
        return table

    def __getitem__(self, symbol):
        return self.counts[symbol]

    def __len__(self):
        return N_SYMBOLS

    def __iter__(self):
        return iter(self.counts)

    def __eq__(self, other):
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        return self.counts == other.counts

    def __repr__(self):
        used = {s: c for s, c in enumerate(self.counts) if c}
        return f"FrequencyTable(total={self.total}, counts={used})"


def count_and_rewind(stream, buffer_size=BUF_SIZE):
    """
    Count the frequencies of stream and return a source positioned
    at the start of the counted data, ready for a second pass.

    Forward-only streams are spooled into a temporary file
    that stays in memory up to buffer_size bytes.

    :return: tuple (FrequencyTable, source stream)
    """
    if stream.seekable():
        start = stream.tell()
        table = FrequencyTable.from_stream(stream, buffer_size)
        stream.seek(start)
        return table, stream

    spool = tempfile.SpooledTemporaryFile(max_size=buffer_size)
    table = FrequencyTable.from_stream(stream, buffer_size, copy_to=spool)
    spool.seek(0)
    return table, spool
