#
# Build QR-Code.. the encoder pipeline from a phrase to a QRCode:
# mode, header, data, version, length, termination, Reed-Solomon blocks,
# interleaving and mask selection. Each stage fails fast, nothing is
# retried.
#

import logging
import sys
from . import phrasecoder
from . import matrix
from . import qrpenalty
from .bitbuffer import BitBuffer
from .bytegrid import ByteGrid
from .charset import get_character_set_eci_by_name
from .exceptions import InvalidArgumentError, DataTooBigError, InternalConsistencyError
from .galois import ReedSolomonEncoder, QR_CODE_FIELD_256
from .hints import EncodeHint, normalize_hints, get_int_hint, get_bool_hint, get_str_hint
from .phrasecoder import Mode
from .qrcode import QRCode
from .version import Version, ErrorCorrectionLevel

logger = logging.getLogger(__name__)


class BlockPair(object):
    """Data codewords of one Reed-Solomon block and their EC codewords."""
    def __init__(self, data_bytes : bytearray, error_correction_bytes : bytearray):
        self.data_bytes = data_bytes
        self.error_correction_bytes = error_correction_bytes


#
def calculate_mask_penalty(grid : ByteGrid) -> int:
    # four rules, see qrpenalty
    return qrpenalty.penalty(grid).calc_total()


#
def encode(content : str, ec_level, hints=None) -> QRCode:
    """
    Encode a phrase into a QR-code.

    Parameters:
    -----------
    content : str
        Phrase to encode, must not be empty.
    ec_level : ErrorCorrectionLevel or str
        One of L, M, Q, H.
    hints : dict
        Optional EncodeHint -> value mapping. Used hints are
        CHARACTER_SET, QR_VERSION, QR_MASK_PATTERN and GS1_FORMAT.

    Raises:
    -------
    InvalidArgumentError
        Empty content or malformed hints.
    EncodingError
        The content cannot be represented in the chosen mode / charset.
    DataTooBigError
        The content does not fit the requested or any version.

    Return:
    -------
        QRCode with mode, level, version, mask and the module matrix.
    """
    if (not content):
        raise InvalidArgumentError("Found empty contents")

    ec_level = ErrorCorrectionLevel.parse(ec_level)
    hints = normalize_hints(hints)

    # Determine what character encoding has been specified by the caller, if any
    has_encoding_hint = EncodeHint.CHARACTER_SET in hints
    encoding = get_str_hint(hints, EncodeHint.CHARACTER_SET, phrasecoder.DEFAULT_BYTE_MODE_ENCODING)

    # One segment only, even if several would be more compact
    mode = phrasecoder.choose_mode(content)
    logger.debug("Phrase of %d characters in %s mode", len(content), mode.name)

    # mode and length, plus "header" segments like ECI
    header_bits = BitBuffer()

    if (mode is Mode.BYTE and has_encoding_hint):
        eci = get_character_set_eci_by_name(encoding)

        if (eci is not None):
            phrasecoder.append_eci(eci, header_bits)

    # GS1 formatted codes are prefixed with FNC1 in first position
    if (get_bool_hint(hints, EncodeHint.GS1_FORMAT)):
        phrasecoder.append_mode_info(Mode.FNC1_FIRST_POSITION, header_bits)

    phrasecoder.append_mode_info(mode, header_bits)

    # data is kept apart so its size can be used for the version search
    data_bits = BitBuffer()
    phrasecoder.append_bytes(content, mode, data_bits, encoding)

    version_number = get_int_hint(hints, EncodeHint.QR_VERSION)

    if (version_number is not None):
        version = Version.for_number(version_number)
        bits_needed = calculate_bits_needed(mode, header_bits, data_bits, version)

        if (not will_fit(bits_needed, version, ec_level)):
            raise DataTooBigError(f"Data too big for requested version {version_number}-{ec_level.name}")
    else:
        version = recommend_version(ec_level, mode, header_bits, data_bits)

    header_and_data_bits = BitBuffer()
    header_and_data_bits.append_buffer(header_bits)

    num_letters = data_bits.size_in_bytes if mode is Mode.BYTE else len(content)
    phrasecoder.append_length_info(num_letters, version, mode, header_and_data_bits)
    header_and_data_bits.append_buffer(data_bits)

    ec_blocks = version.ec_blocks_for_level(ec_level)
    num_data_bytes = version.total_codewords - ec_blocks.total_ec_codewords

    terminate_bits(num_data_bytes, header_and_data_bits)

    final_bits = interleave_with_ec_bytes(header_and_data_bits, version.total_codewords,
                                          num_data_bytes, ec_blocks.num_blocks)

    qr_code = QRCode()
    qr_code.ec_level = ec_level
    qr_code.mode = mode
    qr_code.version = version

    dimension = version.dimension

    # a valid mask hint wins, anything else falls back to the search
    mask_pattern = -1
    mask_hint = get_int_hint(hints, EncodeHint.QR_MASK_PATTERN)

    if (mask_hint is not None and QRCode.is_valid_mask_pattern(mask_hint)):
        mask_pattern = mask_hint

    if (mask_pattern == -1):
        mask_pattern = choose_mask_pattern(final_bits, ec_level, version, ByteGrid(dimension, dimension))

    qr_code.mask_pattern = mask_pattern

    grid = ByteGrid(dimension, dimension)
    matrix.build_matrix(final_bits, ec_level, version, mask_pattern, grid)
    qr_code.matrix = grid

    logger.debug("Encoded %s-%s, mask %d, %dx%d modules",
                 version.number, ec_level.name, mask_pattern, dimension, dimension)
    return qr_code


#
def recommend_version(ec_level : ErrorCorrectionLevel, mode : Mode,
                      header_bits : BitBuffer, data_bits : BitBuffer) -> Version:
    """
    Smallest version holding the data. The length field width depends on
    the version and the version on the total length, so the width of
    version 1 is used for a provisional guess, and the guess's width for
    the final answer. This is a single correction step, not iterated.
    """
    provisional_bits_needed = calculate_bits_needed(mode, header_bits, data_bits, Version.for_number(1))
    provisional_version = choose_version(provisional_bits_needed, ec_level)

    bits_needed = calculate_bits_needed(mode, header_bits, data_bits, provisional_version)
    version = choose_version(bits_needed, ec_level)

    logger.debug("Provisional version %d, final version %d (%d bits)",
                 provisional_version.number, version.number, bits_needed)
    return version


def calculate_bits_needed(mode : Mode, header_bits : BitBuffer, data_bits : BitBuffer, version : Version) -> int:
    return header_bits.size + mode.character_count_bits(version) + data_bits.size


def choose_version(num_input_bits : int, ec_level : ErrorCorrectionLevel) -> Version:
    # brute force search.. could probably use binary search
    for n in range(Version.QR_MIN_VERSION, Version.QR_MAX_VERSION + 1):
        version = Version.for_number(n)

        if (will_fit(num_input_bits, version, ec_level)):
            return version

    raise DataTooBigError("Data too big")


def will_fit(num_input_bits : int, version : Version, ec_level : ErrorCorrectionLevel) -> bool:
    """True if num_input_bits fit the data codewords of version-ec_level."""
    num_data_bytes = version.num_data_codewords(ec_level)
    total_input_bytes = (num_input_bits + 7) // 8
    return num_data_bytes >= total_input_bytes


#
def terminate_bits(num_data_bytes : int, bits : BitBuffer):
    """
    Up to 4 terminator zero bits, zero bits to the next byte boundary and
    then alternating 0xEC / 0x11 pad bytes up to num_data_bytes.
    """
    capacity = num_data_bytes * 8

    if (bits.size > capacity):
        raise DataTooBigError(f"data bits cannot fit in the QR Code {bits.size} > {capacity}")

    # terminating zeroes
    n = 0

    while (n < 4 and bits.size < capacity):
        bits.append_bit(False)
        n += 1

    # align to 8 bits
    num_bits_in_last_byte = bits.size & 0x07

    if (num_bits_in_last_byte > 0):
        for _ in range(num_bits_in_last_byte, 8):
            bits.append_bit(False)

    num_padding_bytes = num_data_bytes - bits.size_in_bytes

    for i in range(num_padding_bytes):
        bits.append_bits(0xEC if (i & 0x01) == 0 else 0x11, 8)

    if (bits.size != capacity):
        raise InternalConsistencyError("Bits size does not equal capacity")


#
def get_num_data_bytes_and_num_ec_bytes_for_block_id(num_total_bytes : int, num_data_bytes : int,
                                                     num_rs_blocks : int, block_id : int):
    """
    Returns (data bytes, ec bytes) of block block_id. Blocks come in two
    groups, the second group's blocks carry one data byte more.
    """
    if (block_id >= num_rs_blocks):
        raise InternalConsistencyError("Block ID too large")

    # In the following comments, we use numbers of Version 7-H.
    # num_rs_blocks_in_group2 = 196 % 5 = 1
    num_rs_blocks_in_group2 = num_total_bytes % num_rs_blocks
    # num_rs_blocks_in_group1 = 5 - 1 = 4
    num_rs_blocks_in_group1 = num_rs_blocks - num_rs_blocks_in_group2
    # num_total_bytes_in_group1 = 196 / 5 = 39
    num_total_bytes_in_group1 = num_total_bytes // num_rs_blocks
    # num_total_bytes_in_group2 = 39 + 1 = 40
    num_total_bytes_in_group2 = num_total_bytes_in_group1 + 1
    # num_data_bytes_in_group1 = 66 / 5 = 13
    num_data_bytes_in_group1 = num_data_bytes // num_rs_blocks
    # num_data_bytes_in_group2 = 13 + 1 = 14
    num_data_bytes_in_group2 = num_data_bytes_in_group1 + 1
    # num_ec_bytes_in_group1 = 39 - 13 = 26
    num_ec_bytes_in_group1 = num_total_bytes_in_group1 - num_data_bytes_in_group1
    # num_ec_bytes_in_group2 = 40 - 14 = 26
    num_ec_bytes_in_group2 = num_total_bytes_in_group2 - num_data_bytes_in_group2

    # 26 = 26
    if (num_ec_bytes_in_group1 != num_ec_bytes_in_group2):
        raise InternalConsistencyError("EC bytes mismatch")

    # 5 = 4 + 1
    if (num_rs_blocks != num_rs_blocks_in_group1 + num_rs_blocks_in_group2):
        raise InternalConsistencyError("RS blocks mismatch")

    # 196 = (13 + 26) * 4 + (14 + 26) * 1
    if (num_total_bytes !=
        (num_data_bytes_in_group1 + num_ec_bytes_in_group1) * num_rs_blocks_in_group1 +
        (num_data_bytes_in_group2 + num_ec_bytes_in_group2) * num_rs_blocks_in_group2):
        raise InternalConsistencyError("Total bytes mismatch")

    if (block_id < num_rs_blocks_in_group1):
        return num_data_bytes_in_group1, num_ec_bytes_in_group1

    return num_data_bytes_in_group2, num_ec_bytes_in_group2


def generate_ec_bytes(data_bytes : bytearray, num_ec_bytes : int, encoder : ReedSolomonEncoder=None) -> bytearray:
    if (encoder is None):
        encoder = ReedSolomonEncoder(QR_CODE_FIELD_256)

    to_encode = list(data_bytes) + [0] * num_ec_bytes
    encoder.encode(to_encode, num_ec_bytes)
    return bytearray(to_encode[len(data_bytes):])


def interleave_with_ec_bytes(bits : BitBuffer, num_total_bytes : int,
                             num_data_bytes : int, num_rs_blocks : int) -> BitBuffer:
    """
    Splits the data codewords into Reed-Solomon blocks, computes the EC
    codewords per block and interleaves: byte 0 of every block, byte 1 of
    every block, ... first for data then for EC codewords.
    """
    if (bits.size_in_bytes != num_data_bytes):
        raise InternalConsistencyError("Number of bits and data bytes does not match")

    encoder = ReedSolomonEncoder(QR_CODE_FIELD_256)
    data_bytes_offset = 0
    max_num_data_bytes = 0
    max_num_ec_bytes = 0
    blocks = []

    for block_id in range(num_rs_blocks):
        size, num_ec_bytes = get_num_data_bytes_and_num_ec_bytes_for_block_id(
            num_total_bytes, num_data_bytes, num_rs_blocks, block_id)

        data_bytes = bits.to_bytes(8 * data_bytes_offset, size)
        ec_bytes = generate_ec_bytes(data_bytes, num_ec_bytes, encoder)
        blocks.append(BlockPair(data_bytes, ec_bytes))

        max_num_data_bytes = max(max_num_data_bytes, size)
        max_num_ec_bytes = max(max_num_ec_bytes, len(ec_bytes))
        data_bytes_offset += size

    if (num_data_bytes != data_bytes_offset):
        raise InternalConsistencyError("Data bytes does not match offset")

    result = BitBuffer()

    # data
    for i in range(max_num_data_bytes):
        for block in blocks:
            if (i < len(block.data_bytes)):
                result.append_bits(block.data_bytes[i], 8)

    # ecc
    for i in range(max_num_ec_bytes):
        for block in blocks:
            if (i < len(block.error_correction_bytes)):
                result.append_bits(block.error_correction_bytes[i], 8)

    if (num_total_bytes != result.size_in_bytes):
        raise InternalConsistencyError(
            f"Interleaving error: {num_total_bytes} and {result.size_in_bytes} differ.")

    logger.debug("%d blocks, %d data + %d ec codewords",
                 num_rs_blocks, num_data_bytes, num_total_bytes - num_data_bytes)
    return result


#
def choose_mask_pattern(bits : BitBuffer, ec_level : ErrorCorrectionLevel,
                        version : Version, grid : ByteGrid) -> int:
    """Tries all 8 masks on grid and returns the one with the lowest penalty."""
    lowest_mask = -1
    lowest_penalty = sys.maxsize

    for mask in range(QRCode.NUM_MASK_PATTERNS):
        matrix.build_matrix(bits, ec_level, version, mask, grid)
        penalty = calculate_mask_penalty(grid)
        logger.debug("Mask %d penalty %d", mask, penalty)

        # strict, the first of equal penalties wins
        if (penalty < lowest_penalty):
            lowest_mask = mask
            lowest_penalty = penalty

    return lowest_mask
