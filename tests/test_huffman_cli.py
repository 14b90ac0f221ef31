import pytest

from huffman_archive import MAGIC
from huffman_cli import main


def test_compress_and_extract(tmp_path):
    source = tmp_path / "file.in"
    archive = tmp_path / "file.hfmn"
    restored = tmp_path / "file.out"
    source.write_bytes(b"command line round trip " * 64)

    assert main([str(source), str(archive)]) == 0
    assert archive.read_bytes()[:4] == MAGIC
    assert main(["-x", str(archive), str(restored)]) == 0
    assert restored.read_bytes() == source.read_bytes()


@pytest.mark.parametrize(
    "argv",
    [[], ["only_one"], ["-x", "a", "b", "c"], ["-y", "a", "b"], ["a", "-x", "b"], ["a", "b", "-x"], ["-x", "-x", "a", "b"]],
)
def test_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "usage" in capsys.readouterr().err


def test_missing_input(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing"), str(tmp_path / "out")])
    assert excinfo.value.code == 2


def test_not_an_archive(tmp_path, capsys):
    source = tmp_path / "plain.txt"
    source.write_bytes(b"definitely not an archive")
    assert main(["-x", str(source), str(tmp_path / "out")]) == 1
    assert "Not a huffman archive" in capsys.readouterr().err
