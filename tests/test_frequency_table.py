import io

import pytest

from frequency_table import FrequencyTable, count_and_rewind


def test_counts_every_byte_value():
    table = FrequencyTable.from_bytes(b"aaaabbbccd")
    assert table.total == 10
    assert table[ord("a")] == 4
    assert table[ord("b")] == 3
    assert table[ord("c")] == 2
    assert table[ord("d")] == 1
    assert sum(table) == 10
    assert len(table) == 256


def test_empty_source():
    table = FrequencyTable.from_bytes(b"")
    assert table.total == 0
    assert list(table) == [0] * 256


def test_stream_matches_bytes_with_small_blocks():
    data = bytes(range(256)) * 3 + b"xyz"
    table = FrequencyTable.from_stream(io.BytesIO(data), buffer_size=5)
    assert table == FrequencyTable.from_bytes(data)
    assert table.total == len(data)


def test_wrong_number_of_counts():
    with pytest.raises(ValueError):
        FrequencyTable([1, 2, 3])


def test_seekable_stream_is_rewound_to_start_position():
    stream = io.BytesIO(b"headerpayload")
    stream.seek(6)
    table, source = count_and_rewind(stream)
    assert source is stream
    assert table.total == len(b"payload")
    assert source.read() == b"payload"


def test_forward_only_stream_is_spooled(forward_only):
    data = b"forward only data" * 20
    table, source = count_and_rewind(forward_only(data), buffer_size=16)
    assert table.total == len(data)
    assert source.read() == data
    source.close()
