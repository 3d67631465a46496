import numpy as np
from .exceptions import InvalidArgumentError

# penalty weights, see table 11 of ISO/IEC 18004
N1 = 3
N2 = 3
N3 = 40
N4 = 10

FINDER_LIKE_ = (1, 0, 1, 1, 1, 0, 1)


#
def get_data_mask_bit(mask : int, x : int, y : int) -> bool:
    """True if the data module at column x, row y is flipped by mask."""
    if (mask == 0):
        # (row + column) mod 2 == 0
        flip = (y + x) & 0x1
    elif (mask == 1):
        # row mod 2 == 0
        flip = y & 0x1
    elif (mask == 2):
        # column mod 3 == 0
        flip = x % 3
    elif (mask == 3):
        # (row + column) mod 3 == 0
        flip = (y + x) % 3
    elif (mask == 4):
        # ( floor(row / 2) + floor(column / 3) ) mod 2 == 0
        flip = ((y // 2) + (x // 3)) & 0x1
    elif (mask == 5):
        # ((row * column) mod 2) + ((row * column) mod 3) == 0
        t = y * x
        flip = (t & 0x1) + (t % 3)
    elif (mask == 6):
        # ( ((row * column) mod 2) + ((row * column) mod 3) ) mod 2 == 0
        t = y * x
        flip = ((t & 0x1) + (t % 3)) & 0x1
    elif (mask == 7):
        # ( ((row + column) mod 2) + ((row * column) mod 3) ) mod 2 == 0
        flip = (((y * x) % 3) + ((y + x) & 0x1)) & 0x1
    else:
        raise InvalidArgumentError(f"Invalid mask pattern {mask}")

    return flip == 0


class penalty(object):
    """
    Mask penalty scoring over a fully built grid (every cell 0 or 1).
    The lower the total, the better the mask.
    """
    def __init__(self, grid):
        self.qr = grid.array
        self.rows = self.qr.tolist()
        self.cols = self.qr.T.tolist()

    #
    @staticmethod
    def runs_(lines) -> int:
        score = 0

        for line in lines:
            consecutive = 0
            prev = -1

            for module in line:
                if (module == prev):
                    consecutive += 1
                else:
                    if (consecutive >= 5):
                        score += N1 + (consecutive - 5)

                    consecutive = 1
                    prev = module

            if (consecutive >= 5):
                score += N1 + (consecutive - 5)

        return score

    def calc_rule1(self) -> int:
        # 5 consecutive modules of the same color = 3 penalty points.
        # After 5 each additional module of the same color adds 1 point.
        # Done for each row and column.
        return penalty.runs_(self.rows) + penalty.runs_(self.cols)

    #
    def calc_rule2(self) -> int:
        # 3 points for every 2x2 block of one color, blocks may overlap
        q = self.qr
        top_left = q[:-1, :-1]
        same = (top_left == q[:-1, 1:]) & (top_left == q[1:, :-1]) & (top_left == q[1:, 1:])
        return N2 * int(np.count_nonzero(same))

    #
    @staticmethod
    def is_white_(line, start : int, end : int) -> bool:
        # parts outside of the symbol count as light
        for module in line[max(start, 0):min(end, len(line))]:
            if (module == 1):
                return False

        return True

    @staticmethod
    def finder_like_(lines) -> int:
        found = 0

        for line in lines:
            for x in range(len(line) - 6):
                if (line[x] == 1 and tuple(line[x:x + 7]) == FINDER_LIKE_ and
                    (penalty.is_white_(line, x - 4, x) or penalty.is_white_(line, x + 7, x + 11))):
                    found += 1

        return found

    def calc_rule3(self) -> int:
        # look for 1011101 preceded or followed by 4 light modules
        return N3 * (penalty.finder_like_(self.rows) + penalty.finder_like_(self.cols))

    #
    def calc_rule4(self) -> int:
        # 10 points for every full 5% the dark share deviates from 50%
        total = self.qr.size
        black = int(np.count_nonzero(self.qr == 1))
        five_percent_variances = abs(black * 2 - total) * 10 // total
        return N4 * five_percent_variances

    #
    def calc_total(self) -> int:
        return self.calc_rule1() + self.calc_rule2() + self.calc_rule3() + self.calc_rule4()
