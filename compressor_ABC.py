from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Interface describing compression and decompression of byte streams.
    Keyword options of the helpers are passed to the compressor constructor.
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads bytes from the input stream, compresses them and writes
        the archive into the output stream.

        Args:
            input_stream: Source of the data
            output_stream: Sink for the compressed data

        Returns:
            Log information
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads an archive from the input stream and writes the restored
        bytes into the output stream.

        Args:
            input_stream: Source of the compressed data
            output_stream: Sink for the restored data

        Returns:
            Log information
        """

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Helper for compressing a file.

        Args:
            input_file: Path to the source file
            output_file: Path to the archive

        Returns:
            Log information
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Helper for decompressing a file.

        Args:
            input_file: Path to the archive
            output_file: Path to the restored file

        Returns:
            Log information
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.decompress(in_file, out_file)

    @classmethod
    def compress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Helper for compressing bytes in memory.

        Args:
            data: Data to compress

        Returns:
            Tuple (compressed data, log information)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Helper for decompressing bytes in memory.

        Args:
            data: Archive to decompress

        Returns:
            Tuple (restored data, log information)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
