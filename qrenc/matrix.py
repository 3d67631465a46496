#
# Build the QR-code module matrix: function patterns, format and version
# information and finally the (masked) data bits.
#

import numpy as np
from .bitbuffer import BitBuffer
from .bytegrid import ByteGrid
from .exceptions import InvalidArgumentError, InternalConsistencyError
from . import qrpenalty

QR_BLACK = 1
QR_WHITE = 0

# finder pattern
finder_ = np.array(
            [1,1,1,1,1,1,1,
             1,0,0,0,0,0,1,
             1,0,1,1,1,0,1,
             1,0,1,1,1,0,1,
             1,0,1,1,1,0,1,
             1,0,0,0,0,0,1,
             1,1,1,1,1,1,1], np.int8).reshape(7,7)

# alignment pattern
alignment_ = np.array(
            [1,1,1,1,1,
             1,0,0,0,1,
             1,0,1,0,1,
             1,0,0,0,1,
             1,1,1,1,1], np.int8).reshape(5,5)

# (x,y) of the format information bits around the upper left finder
type_info_coordinates_ = (
    (8, 0), (8, 1), (8, 2), (8, 3), (8, 4), (8, 5), (8, 7), (8, 8),
    (7, 8), (5, 8), (4, 8), (3, 8), (2, 8), (1, 8), (0, 8))

VERSION_INFO_POLY = 0x1f25  # x^12 + x^11 + x^10 + x^9 + x^8 + x^5 + x^2 + 1
TYPE_INFO_POLY = 0x537      # x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
TYPE_INFO_MASK_PATTERN = 0x5412


#
def calculate_bch_code(value : int, poly : int) -> int:
    """
    Remainder of value * x**(degree of poly) divided by poly, i.e. the
    BCH check bits appended to format and version information.
    """
    if (poly == 0):
        raise InvalidArgumentError("0 polynomial")

    msb_in_poly = poly.bit_length()
    value <<= msb_in_poly - 1

    while (value.bit_length() >= msb_in_poly):
        value ^= poly << (value.bit_length() - msb_in_poly)

    return value


def make_type_info_bits(ec_level, mask : int) -> BitBuffer:
    """15 bit format information: level, mask, BCH(15,5), XOR mask."""
    if (mask < 0 or mask >= 8):
        raise InvalidArgumentError(f"Invalid mask pattern {mask}")

    bits = BitBuffer()
    type_info = (ec_level.bits << 3) | mask
    bits.append_bits(type_info, 5)
    bits.append_bits(calculate_bch_code(type_info, TYPE_INFO_POLY), 10)

    mask_bits = BitBuffer()
    mask_bits.append_bits(TYPE_INFO_MASK_PATTERN, 15)
    bits.xor(mask_bits)

    if (bits.size != 15):
        raise InternalConsistencyError(f"Should not happen but we got {bits.size} type info bits")

    return bits


def make_version_info_bits(version) -> BitBuffer:
    """18 bit version information: version number and BCH(18,6)."""
    bits = BitBuffer()
    bits.append_bits(version.number, 6)
    bits.append_bits(calculate_bch_code(version.number, VERSION_INFO_POLY), 12)

    if (bits.size != 18):
        raise InternalConsistencyError(f"Should not happen but we got {bits.size} version info bits")

    return bits


#
def prep_finder_patterns(grid : ByteGrid):
    # also include separators around finder patterns.
    q = grid.array
    d = grid.width

    # upper left, upper right, lower left
    q[0:7, 0:7] = finder_
    q[0:7, d-7:d] = finder_
    q[d-7:d, 0:7] = finder_

    # rows
    q[7, 0:8] = QR_WHITE
    q[7, d-8:d] = QR_WHITE
    q[d-8, 0:8] = QR_WHITE

    # columns
    q[0:7, 7] = QR_WHITE
    q[0:7, d-8] = QR_WHITE
    q[d-7:d, 7] = QR_WHITE


def prep_dark_module(grid : ByteGrid):
    if (grid.get(8, grid.height - 8) == QR_WHITE):
        raise InternalConsistencyError("Dark module position already in use")

    grid.set(8, grid.height - 8, QR_BLACK)


def prep_alignment_patterns(version, grid : ByteGrid):
    # version 1 has none, centers overlapping a finder are skipped
    centers = version.alignment_pattern_centers

    for y in centers:
        for x in centers:
            if (grid.is_empty(x, y)):
                grid.array[y-2:y+3, x-2:x+3] = alignment_


def prep_timing_patterns(grid : ByteGrid):
    # seventh row and seventh column, alignment patterns may already sit there
    for n in range(8, grid.width - 8):
        pixel = (n + 1) % 2

        if (grid.is_empty(n, 6)):
            grid.set(n, 6, pixel)

        if (grid.is_empty(6, n)):
            grid.set(6, n, pixel)


def insert_level_mask(ec_level, mask : int, grid : ByteGrid):
    fmt = make_type_info_bits(ec_level, mask)

    for i in range(fmt.size):
        # least significant bit first
        bit = fmt.get(fmt.size - 1 - i)
        x1, y1 = type_info_coordinates_[i]
        grid.set(x1, y1, bit)

        if (i < 8):
            # below the upper right finder
            x2, y2 = grid.width - i - 1, 8
        else:
            # right of the lower left finder
            x2, y2 = 8, grid.height - 7 + (i - 8)

        grid.set(x2, y2, bit)


def insert_version(version, grid : ByteGrid):
    # For QR code versions greater or equal to 7
    if (version.number < 7):
        return

    info = make_version_info_bits(version)
    i = 6 * 3 - 1

    for x in range(6):
        for y in range(3):
            bit = info.get(i)
            i -= 1
            # lower left and upper right blocks are transposes
            grid.set(x, grid.height - 11 + y, bit)
            grid.set(grid.height - 11 + y, x, bit)


#
def encode_layout(data_bits : BitBuffer, mask : int, grid : ByteGrid):
    """
    Places the data bits in the two module wide zig-zag columns, starting
    from the lower right corner and skipping the vertical timing pattern.
    Bits are XORed with the mask on the way unless mask is -1. Cells left
    over after the last bit are filled with masked zeroes.
    """
    q = grid.array
    d = grid.width
    bits = list(data_bits)
    n = 0
    direction = -1
    x = d - 1
    y = d - 1

    while (x > 0):
        if (x == 6):
            x -= 1

        while (0 <= y < grid.height):
            for xx in (x, x - 1):
                if (q[y, xx] != ByteGrid.UNSET):
                    continue

                if (n < len(bits)):
                    bit = bits[n]
                    n += 1
                else:
                    bit = False

                if (mask != -1 and qrpenalty.get_data_mask_bit(mask, xx, y)):
                    bit = not bit

                q[y, xx] = QR_BLACK if bit else QR_WHITE

            y += direction

        direction = -direction
        y += direction
        x -= 2

    if (n != len(bits)):
        raise InternalConsistencyError(f"Not all bits consumed: {n}/{len(bits)}")


#
def build_matrix(data_bits : BitBuffer, ec_level, version, mask : int, grid : ByteGrid):
    """
    Stencils a complete symbol into grid. The grid is cleared first so
    the same grid can be reused between mask trials.
    """
    grid.clear(ByteGrid.UNSET)

    prep_finder_patterns(grid)
    prep_dark_module(grid)
    prep_alignment_patterns(version, grid)
    prep_timing_patterns(grid)
    insert_level_mask(ec_level, mask, grid)
    insert_version(version, grid)
    encode_layout(data_bits, mask, grid)
