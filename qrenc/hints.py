#
# Encode hints. Hints are passed as a mapping keyed by EncodeHint (or
# the hint name as a string). Values may be given natively or as their
# string representation, e.g. {"QR_VERSION": "7", "GS1_FORMAT": "true"}.
#

from enum import Enum
from .exceptions import InvalidArgumentError


class EncodeHint(Enum):
    ERROR_CORRECTION = "ERROR_CORRECTION"   # ErrorCorrectionLevel or "L","M","Q","H"
    CHARACTER_SET = "CHARACTER_SET"         # encoding name used in BYTE mode
    MARGIN = "MARGIN"                       # quiet zone in modules, writer only
    QR_VERSION = "QR_VERSION"               # 1..40
    QR_MASK_PATTERN = "QR_MASK_PATTERN"     # 0..7
    GS1_FORMAT = "GS1_FORMAT"               # bool


#
def normalize_hints(hints) -> dict:
    if (hints is None):
        return {}

    result = {}

    for key, value in hints.items():
        if (not isinstance(key, EncodeHint)):
            try:
                key = EncodeHint[str(key).upper()]
            except KeyError:
                raise InvalidArgumentError(f"Unknown encode hint '{key}'") from None

        result[key] = value

    return result


def get_int_hint(hints : dict, hint : EncodeHint, default=None):
    if (hint not in hints):
        return default

    value = hints[hint]

    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(f"{hint.name} must be an integer, got '{value}'") from None


def get_bool_hint(hints : dict, hint : EncodeHint, default : bool=False) -> bool:
    if (hint not in hints):
        return default

    value = hints[hint]

    if (isinstance(value, bool)):
        return value

    # anything but "true" is false
    return str(value).strip().lower() == "true"


def get_str_hint(hints : dict, hint : EncodeHint, default=None):
    if (hint not in hints):
        return default

    return str(hints[hint])
