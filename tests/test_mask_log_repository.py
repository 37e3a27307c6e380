import logging

import pytest

from pixelmask.models.errors import MalformedLogError, MissingArtifactError
from pixelmask.models.mask_log import MaskLog
from pixelmask.repositories.mask_log_repository import MaskLogRepository


@pytest.fixture
def repo() -> MaskLogRepository:
    return MaskLogRepository()


def test_read_parses_offset_and_triplets(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_text("100\n1 2 3\n4 5 6\n")

    log = repo.read(path)

    assert log.offset == 100
    assert log.n_pixels == 2
    assert log.triplets.tolist() == [[1, 2, 3], [4, 5, 6]]


def test_read_accepts_any_whitespace_layout(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_text("7 300 2 3\n\t4\n5 6")

    log = repo.read(path)

    assert log.offset == 7
    assert log.triplets.tolist() == [[300, 2, 3], [4, 5, 6]]


def test_trailing_partial_triplet_is_dropped(repo, tmp_path, caplog):
    path = tmp_path / "M1.txt"
    path.write_text("0\n1 2 3\n4 5\n")

    with caplog.at_level(logging.WARNING):
        log = repo.read(path)

    assert log.n_pixels == 1
    assert log.triplets.tolist() == [[1, 2, 3]]
    assert "incomplete trailing triplet" in caplog.text


def test_parse_stops_at_non_integer_token(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_text("0\n1 2 3\n4 x 6\n7 8 9\n")

    log = repo.read(path)

    assert log.triplets.tolist() == [[1, 2, 3]]


def test_offset_only_log_has_no_pixels(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_text("42\n")

    log = repo.read(path)

    assert log.offset == 42
    assert log.n_pixels == 0


@pytest.mark.parametrize("content", ["", "abc\n1 2 3\n", "-5\n1 2 3\n"])
def test_bad_offset_is_fatal(repo, tmp_path, content):
    path = tmp_path / "M1.txt"
    path.write_text(content)

    with pytest.raises(MalformedLogError):
        repo.read(path)


def test_missing_log(repo, tmp_path):
    with pytest.raises(MissingArtifactError):
        repo.read(tmp_path / "nope.txt")


def test_write_format(repo, tmp_path):
    path = tmp_path / "sub" / "M2.txt"

    repo.write(MaskLog(offset=100, triplets=[[201, 201, 201], [0, 510, 3]]), path)

    assert path.read_bytes() == b"100\n201 201 201\n0 510 3\n"


def test_read_lines_splits_on_newline_only(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_bytes(b"1\r\n2 3\r4\n5 6 7")

    assert list(repo.read_lines(path)) == [b"1\r", b"2 3\r4", b"5 6 7"]


def test_read_lines_passes_undecodable_bytes_through(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_bytes(b"100\n\xff\xfe 2 3\n")

    assert list(repo.read_lines(path)) == [b"100", b"\xff\xfe 2 3"]


def test_undecodable_token_ends_the_parse(repo, tmp_path, caplog):
    path = tmp_path / "M1.txt"
    path.write_bytes(b"100\n1 2 3\n\xff\xfe 2 3\n")

    with caplog.at_level(logging.WARNING):
        log = repo.read(path)

    assert log.offset == 100
    assert log.triplets.tolist() == [[1, 2, 3]]
    assert "non-integer token" in caplog.text


def test_undecodable_offset_is_malformed(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_bytes(b"\xe9\n1 2 3\n")

    with pytest.raises(MalformedLogError):
        repo.read(path)


def test_crlf_log_parses_like_lf(repo, tmp_path):
    path = tmp_path / "M1.txt"
    path.write_bytes(b"5\r\n1 2 3\r\n")

    log = repo.read(path)

    assert log.offset == 5
    assert log.triplets.tolist() == [[1, 2, 3]]
