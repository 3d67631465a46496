class QRCode(object):
    """
    Result of an encode call. The encoder fills the fields in as the
    pipeline progresses; callers get it back fully populated.
    """
    NUM_MASK_PATTERNS = 8

    def __init__(self):
        self.mode = None
        self.ec_level = None
        self.version = None
        self.mask_pattern = -1
        self.matrix = None

    @staticmethod
    def is_valid_mask_pattern(mask_pattern : int) -> bool:
        return 0 <= mask_pattern < QRCode.NUM_MASK_PATTERNS

    def __str__(self):
        out = ["<<"]
        out.append(f" mode: {self.mode.name if self.mode else None}")
        out.append(f" ecLevel: {self.ec_level.name if self.ec_level else None}")
        out.append(f" version: {self.version}")
        out.append(f" maskPattern: {self.mask_pattern}")

        if (self.matrix is None):
            out.append(" matrix: null")
        else:
            out.append(" matrix:")
            out.append(str(self.matrix).rstrip("\n"))

        out.append(">>")
        return "\n".join(out) + "\n"
