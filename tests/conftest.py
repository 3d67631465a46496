import pytest

from qrenc import matrix
from qrenc.bytegrid import ByteGrid
from qrenc.qrpenalty import get_data_mask_bit


def function_pattern_grid(qr_code):
    """Grid with only the function patterns and format/version info set."""
    d = qr_code.version.dimension
    grid = ByteGrid(d, d)
    matrix.prep_finder_patterns(grid)
    matrix.prep_dark_module(grid)
    matrix.prep_alignment_patterns(qr_code.version, grid)
    matrix.prep_timing_patterns(grid)
    matrix.insert_level_mask(qr_code.ec_level, qr_code.mask_pattern, grid)
    matrix.insert_version(qr_code.version, grid)
    return grid


def data_bits_of(qr_code):
    """
    Walks the data modules of a finished symbol in placement order and
    removes the mask. Returns one bool per data module.
    """
    d = qr_code.version.dimension
    reserved = function_pattern_grid(qr_code).array != ByteGrid.UNSET
    modules = qr_code.matrix.array
    bits = []

    for right in range(d - 1, 0, -2):
        if (right <= 6):
            right -= 1

        upward = ((right + 1) & 2) == 0

        for vert in range(d):
            y = d - 1 - vert if upward else vert

            for x in (right, right - 1):
                if (reserved[y, x]):
                    continue

                bit = modules[y, x] == 1

                if (get_data_mask_bit(qr_code.mask_pattern, x, y)):
                    bit = not bit

                bits.append(bit)

    return bits


def bits_to_bytes(bits):
    out = []

    for i in range(0, len(bits) - 7, 8):
        value = 0

        for bit in bits[i:i + 8]:
            value = (value << 1) | int(bit)

        out.append(value)

    return out


@pytest.fixture
def read_codewords():
    """Codewords stored in a QRCode, in the order they were placed."""
    def read(qr_code):
        return bits_to_bytes(data_bits_of(qr_code))[:qr_code.version.total_codewords]

    return read


@pytest.fixture
def read_data_bits():
    """Unmasked data module bits of a QRCode, in placement order."""
    return data_bits_of
