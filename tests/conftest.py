import io

import pytest


class ForwardOnly(io.RawIOBase):
    """Readable stream without seek support, optionally handing out short reads."""

    def __init__(self, data, chunk_size=None):
        self._buf = io.BytesIO(data)
        self._chunk_size = chunk_size

    def readable(self):
        return True

    def readinto(self, b):
        n = len(b)
        if self._chunk_size is not None:
            n = min(n, self._chunk_size)
        chunk = self._buf.read(n)
        b[:len(chunk)] = chunk
        return len(chunk)


@pytest.fixture
def forward_only():
    return ForwardOnly
