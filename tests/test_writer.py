"""Tests for bitmap rendering."""

import numpy as np
import pytest

from qrenc import qrcoder
from qrenc.exceptions import InvalidArgumentError
from qrenc.hints import EncodeHint
from qrenc.writer import QR_BLACK, QR_WHITE, QRCodeWriter, generate_qr_code


def test_default_quiet_zone():
    """One pixel per module plus a 4 module quiet zone."""
    bitmap = QRCodeWriter().encode("HELLO WORLD", hints={EncodeHint.ERROR_CORRECTION: "Q"})

    assert bitmap.shape == (29, 29)
    assert bitmap.dtype == np.uint8
    assert (bitmap[0:4, :] == QR_WHITE).all()
    assert (bitmap[-4:, :] == QR_WHITE).all()
    assert (bitmap[:, 0:4] == QR_WHITE).all()
    assert (bitmap[:, -4:] == QR_WHITE).all()
    # upper left corner of the finder
    assert bitmap[4, 4] == QR_BLACK


def test_modules_match_the_matrix():
    """Dark modules become black pixels and light ones white."""
    hints = {EncodeHint.ERROR_CORRECTION: "M", EncodeHint.MARGIN: 0}
    bitmap = QRCodeWriter().encode("HELLO WORLD", hints=hints)
    code = qrcoder.encode("HELLO WORLD", "M")

    expected = np.where(code.matrix.array == 1, QR_BLACK, QR_WHITE)
    assert bitmap.shape == (21, 21)
    assert (bitmap == expected).all()


def test_scaled_and_centered():
    """The largest integer scale that fits, centered in the requested size."""
    bitmap = QRCodeWriter().encode("HELLO WORLD", 200, 200, {EncodeHint.ERROR_CORRECTION: "Q"})

    assert bitmap.shape == (200, 200)
    # 200 // 29 = 6, (200 - 21 * 6) // 2 = 37
    assert (bitmap[:37, :] == QR_WHITE).all()
    assert (bitmap[:, :37] == QR_WHITE).all()
    assert (bitmap[37:43, 37:43] == QR_BLACK).all()
    assert (bitmap[37 + 126:, :] == QR_WHITE).all()


def test_non_square_request():
    bitmap = QRCodeWriter().encode("HELLO WORLD", 100, 50)
    assert bitmap.shape == (50, 100)


def test_bad_arguments():
    writer = QRCodeWriter()

    with pytest.raises(InvalidArgumentError):
        writer.encode("")

    with pytest.raises(InvalidArgumentError):
        writer.encode("HELLO", -1, 10)

    with pytest.raises(InvalidArgumentError):
        writer.encode("HELLO", hints={EncodeHint.MARGIN: -2})


def test_to_image():
    """Bitmaps convert to 8 bit greyscale images."""
    bitmap = QRCodeWriter().encode("HELLO")
    image = QRCodeWriter.to_image(bitmap)

    assert image.mode == "L"
    assert image.size == (29, 29)
    assert image.getpixel((4, 4)) == QR_BLACK
    assert image.getpixel((0, 0)) == QR_WHITE


def test_generate_qr_code():
    """Convenience wrapper with scale and margin."""
    image = generate_qr_code("HELLO", scale=3)
    assert image.size == (87, 87)

    image = generate_qr_code("HELLO", ec_level="H", margin=1)
    assert image.size == (23, 23)
