import numpy as np
from .exceptions import IndexOutOfRangeError


class ByteGrid(object):
    """
    Square (or rectangular) grid of modules. A cell is 0 (light), 1 (dark)
    or UNSET. Stored row-major, so array[y,x] is the module at (x,y).
    """
    UNSET = -1

    def __init__(self, width : int, height : int):
        self.width = width
        self.height = height
        self.array = np.full((height, width), ByteGrid.UNSET, dtype=np.int8, order='C')

    #
    def check_(self, x : int, y : int):
        # numpy would happily wrap negative indexes
        if (x < 0 or y < 0 or x >= self.width or y >= self.height):
            raise IndexOutOfRangeError(f"({x},{y}) outside of {self.width}x{self.height}")

    def get(self, x : int, y : int) -> int:
        self.check_(x, y)
        return int(self.array[y, x])

    def set(self, x : int, y : int, value):
        self.check_(x, y)
        self.array[y, x] = int(value)

    def is_empty(self, x : int, y : int) -> bool:
        return self.get(x, y) == ByteGrid.UNSET

    #
    def clear(self, value : int=UNSET):
        self.array.fill(value)

    def __str__(self):
        lines = []

        for row in self.array:
            lines.append("".join(" 0" if v == 0 else (" 1" if v == 1 else "  ") for v in row))

        return "\n".join(lines) + "\n"

    def __repr__(self):
        return f"ByteGrid({self.width}x{self.height})"
