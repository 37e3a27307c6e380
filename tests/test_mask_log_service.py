import numpy as np
import pytest

from pixelmask.models.errors import BoundsViolationError
from pixelmask.services.mask_log_service import MaskLogService


@pytest.fixture
def service() -> MaskLogService:
    return MaskLogService()


def test_log_line_is_source_plus_mask(service, make_image, tmp_path):
    source = make_image([[(200, 200, 200)]])
    mask = make_image([[(1, 1, 1)]])
    dest = tmp_path / "M1.txt"

    log = service.write_log(source, mask, offset=0, n_pixels=1, destination=dest)

    assert log.triplets.tolist() == [[201, 201, 201]]
    assert dest.read_text() == "0\n201 201 201\n"


def test_sums_are_not_wrapped(service, make_image):
    source = make_image([[(255, 255, 0), (255, 0, 255)]])
    mask = make_image([[(255, 1, 0)]])

    log = service.generate(source, mask, offset=1, n_pixels=1)

    assert log.triplets.tolist() == [[510, 1, 255]]


def test_offset_is_in_pixels(service, make_image):
    source = make_image([[(1, 2, 3), (4, 5, 6), (7, 8, 9), (10, 11, 12)]])
    mask = make_image([[(0, 0, 0), (100, 100, 100)]])

    log = service.generate(source, mask, offset=2, n_pixels=2)

    assert log.offset == 2
    assert log.triplets.tolist() == [[7, 8, 9], [110, 111, 112]]


def test_first_line_is_offset(service, tmp_path):
    source = np.arange(30, dtype=np.uint8)
    mask = np.zeros(6, dtype=np.uint8)
    dest = tmp_path / "log.txt"

    service.write_log(source, mask, offset=3, n_pixels=2, destination=dest)

    assert dest.read_text().splitlines() == ["3", "9 10 11", "12 13 14"]


def test_write_log_is_deterministic(service, tmp_path):
    rng = np.random.default_rng(11)
    source = rng.integers(0, 256, size=3000, dtype=np.uint8)
    mask = rng.integers(0, 256, size=300, dtype=np.uint8)

    service.write_log(source, mask, 100, 100, tmp_path / "a.txt")
    service.write_log(source, mask, 100, 100, tmp_path / "b.txt")

    assert (tmp_path / "a.txt").read_bytes() == (tmp_path / "b.txt").read_bytes()


def test_read_back_yields_n_pixels(service, tmp_path):
    rng = np.random.default_rng(5)
    source = rng.integers(0, 256, size=600, dtype=np.uint8)
    mask = rng.integers(0, 256, size=48, dtype=np.uint8)
    dest = tmp_path / "log.txt"

    written = service.write_log(source, mask, 100, 16, dest)
    read = service.read_log(dest)

    assert read.offset == 100
    assert read.n_pixels == 16
    assert np.array_equal(read.triplets, written.triplets)


def test_window_exactly_at_end_is_allowed(service):
    source = np.zeros(12, dtype=np.uint8)
    mask = np.ones(6, dtype=np.uint8)

    log = service.generate(source, mask, offset=2, n_pixels=2)

    assert log.n_pixels == 2


def test_source_overrun_is_rejected_before_writing(service, tmp_path):
    source = np.zeros(12, dtype=np.uint8)
    mask = np.zeros(12, dtype=np.uint8)
    dest = tmp_path / "log.txt"

    with pytest.raises(BoundsViolationError):
        service.write_log(source, mask, offset=2, n_pixels=3, destination=dest)
    assert not dest.exists()


def test_mask_overrun_is_rejected(service):
    source = np.zeros(30, dtype=np.uint8)
    mask = np.zeros(6, dtype=np.uint8)

    with pytest.raises(BoundsViolationError):
        service.generate(source, mask, offset=0, n_pixels=3)


def test_negative_offset_is_rejected(service):
    with pytest.raises(BoundsViolationError):
        service.generate(np.zeros(9, dtype=np.uint8), np.zeros(9, dtype=np.uint8), offset=-1, n_pixels=1)


def test_zero_pixels_writes_only_offset(service, tmp_path):
    dest = tmp_path / "log.txt"

    service.write_log(np.zeros(3, dtype=np.uint8), np.zeros(3, dtype=np.uint8), 1, 0, dest)

    assert dest.read_text() == "1\n"
