#
# Static per version tables of the QR-code standard. Everything here is
# read-only after import and safe to share between encode calls.
#

from enum import Enum
from .exceptions import InvalidArgumentError


class ErrorCorrectionLevel(Enum):
    """
    The four error correction levels. bits is the 2 bit code stored in
    the format information, which does not follow the L,M,Q,H order.
    """
    L = (0, 0b01)   # ~7%
    M = (1, 0b00)   # ~15%
    Q = (2, 0b11)   # ~25%
    H = (3, 0b10)   # ~30%

    def __init__(self, ordinal : int, bits : int):
        self.ordinal = ordinal
        self.bits = bits

    @classmethod
    def for_bits(cls, bits : int) -> "ErrorCorrectionLevel":
        for level in cls:
            if (level.bits == bits):
                return level

        raise InvalidArgumentError(f"Invalid error correction bits {bits}")

    @classmethod
    def parse(cls, value) -> "ErrorCorrectionLevel":
        if (isinstance(value, cls)):
            return value

        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise InvalidArgumentError(f"Unknown error correction level '{value}'") from None


class ECBlocks(object):
    """
    Reed-Solomon block layout for one version and level. The blocks come
    in at most two groups, the second group carrying one more data
    codeword per block than the first.
    """
    def __init__(self, ec_codewords_per_block : int, groups):
        self.ec_codewords_per_block = ec_codewords_per_block
        self.groups = tuple(groups)

    @property
    def num_blocks(self) -> int:
        return sum(count for count, _ in self.groups)

    @property
    def total_ec_codewords(self) -> int:
        return self.ec_codewords_per_block * self.num_blocks

    @property
    def num_data_codewords(self) -> int:
        return sum(count * data for count, data in self.groups)

    def __repr__(self):
        return f"ECBlocks(ec={self.ec_codewords_per_block}, groups={list(self.groups)})"


class Version(object):
    QR_MIN_VERSION = 1
    QR_MAX_VERSION = 40

    # total error correction codewords per version, columns L,M,Q,H
    ecc_codewords_tab_ = (
        (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
        (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
        (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
        (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
        (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
        (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
        (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
        (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
        (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
        (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430))

    # number of Reed-Solomon blocks per version, columns L,M,Q,H
    num_blocks_tab_ = (
        (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
        (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
        (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
        (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
        (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
        (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
        (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
        (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81))

    versions_ = []

    def __init__(self, number : int):
        self.number = number
        self.dimension = 17 + 4 * number
        self.total_codewords = Version.num_raw_data_modules_(number) // 8
        self.alignment_pattern_centers = Version.alignment_centers_(number)
        self.ec_blocks_ = {}

        for level in ErrorCorrectionLevel:
            total_ec = Version.ecc_codewords_tab_[number - 1][level.ordinal]
            num_blocks = Version.num_blocks_tab_[number - 1][level.ordinal]
            ec_per_block = total_ec // num_blocks
            num_long = self.total_codewords % num_blocks
            short_data = self.total_codewords // num_blocks - ec_per_block
            groups = [(num_blocks - num_long, short_data)]

            if (num_long > 0):
                groups.append((num_long, short_data + 1))

            self.ec_blocks_[level] = ECBlocks(ec_per_block, groups)

    #
    @staticmethod
    def num_raw_data_modules_(number : int) -> int:
        """Modules left for codewords after all function patterns."""
        result = (16 * number + 128) * number + 64

        if (number >= 2):
            num_align = number // 7 + 2
            result -= (25 * num_align - 10) * num_align - 55

            if (number >= 7):
                # two version information blocks
                result -= 36

        return result

    @staticmethod
    def alignment_centers_(number : int):
        if (number == 1):
            return ()

        num_align = number // 7 + 2

        if (number == 32):
            step = 26
        else:
            step = (number * 4 + num_align * 2 + 1) // (num_align * 2 - 2) * 2

        centers = [6]

        for i in range(num_align - 1):
            centers.insert(1, number * 4 + 10 - i * step)

        return tuple(centers)

    #
    @staticmethod
    def for_number(number : int) -> "Version":
        if (number < Version.QR_MIN_VERSION or number > Version.QR_MAX_VERSION):
            raise InvalidArgumentError(f"Version can be between 1 to 40, got {number}")

        return Version.versions_[number - 1]

    def ec_blocks_for_level(self, level : ErrorCorrectionLevel) -> ECBlocks:
        return self.ec_blocks_[level]

    def num_data_codewords(self, level : ErrorCorrectionLevel) -> int:
        return self.total_codewords - self.ec_blocks_[level].total_ec_codewords

    def __str__(self):
        return str(self.number)

    def __repr__(self):
        return f"Version({self.number})"


Version.versions_ = [Version(n) for n in range(Version.QR_MIN_VERSION, Version.QR_MAX_VERSION + 1)]
