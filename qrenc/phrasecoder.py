#
# Handle encoding of phrases: mode selection and the mode specific
# packing of characters into the bitstream.
#

import logging
from enum import Enum
from .bitbuffer import BitBuffer
from .exceptions import EncodingError, DataTooBigError, InternalConsistencyError

logger = logging.getLogger(__name__)


class Mode(Enum):
    """
    Segment modes. The value is the 4 bit mode indicator followed by the
    character count field widths for versions 1-9, 10-26 and 27-40.
    """
    TERMINATOR = (0b0000, (0, 0, 0))
    NUMERIC = (0b0001, (10, 12, 14))
    ALPHANUMERIC = (0b0010, (9, 11, 13))
    STRUCTURED_APPEND = (0b0011, (0, 0, 0))
    BYTE = (0b0100, (8, 16, 16))
    FNC1_FIRST_POSITION = (0b0101, (0, 0, 0))
    ECI = (0b0111, (0, 0, 0))
    KANJI = (0b1000, (8, 10, 12))
    FNC1_SECOND_POSITION = (0b1001, (0, 0, 0))
    HANZI = (0b1101, (8, 10, 12))

    def __init__(self, bits : int, count_bits):
        self.bits = bits
        self.count_bits_ = count_bits

    def character_count_bits(self, version) -> int:
        number = version.number

        if (number <= 9):
            return self.count_bits_[0]
        elif (number <= 26):
            return self.count_bits_[1]
        else:
            return self.count_bits_[2]


alphanumeric_map_ = {
    "0":0,"1":1,"2":2,"3":3,"4":4,"5":5,"6":6,"7":7,"8":8,"9":9,
    "A":10,"B":11,"C":12,"D":13,"E":14,"F":15,"G":16,"H":17,"I":18,
    "J":19,"K":20,"L":21,"M":22,"N":23,"O":24,"P":25,"Q":26,"R":27,
    "S":28,"T":29,"U":30,"V":31,"W":32,"X":33,"Y":34,"Z":35,
    " ":36,"$":37,"%":38,"*":39,"+":40,"-":41,".":42,"/":43,":":44
}

DEFAULT_BYTE_MODE_ENCODING = "ISO-8859-1"


#
def get_alphanumeric_code(ch : str) -> int:
    """Returns the code of ch in the 45 character table or -1."""
    return alphanumeric_map_.get(ch, -1)


#
def choose_mode(content : str) -> Mode:
    """
    Single pass, single segment mode selection. The first character that
    is neither a digit nor in the alphanumeric table settles on BYTE;
    mixing modes in several segments is not attempted.
    """
    has_numeric = False
    has_alphanumeric = False

    for ch in content:
        if ("0" <= ch <= "9"):
            has_numeric = True
        elif (get_alphanumeric_code(ch) != -1):
            has_alphanumeric = True
        else:
            return Mode.BYTE

    if (has_alphanumeric):
        return Mode.ALPHANUMERIC

    if (has_numeric):
        return Mode.NUMERIC

    return Mode.BYTE


#
def append_mode_info(mode : Mode, bits : BitBuffer):
    bits.append_bits(mode.bits, 4)


def append_length_info(num_letters : int, version, mode : Mode, bits : BitBuffer):
    num_bits = mode.character_count_bits(version)

    if (num_letters >= (1 << num_bits)):
        raise DataTooBigError(f"{num_letters} is bigger than {(1 << num_bits) - 1}")

    bits.append_bits(num_letters, num_bits)


def append_eci(eci, bits : BitBuffer):
    bits.append_bits(Mode.ECI.bits, 4)
    # correct for assignment values up to 127
    bits.append_bits(eci.value, 8)


#
def append_bytes(content : str, mode : Mode, bits : BitBuffer, encoding : str=DEFAULT_BYTE_MODE_ENCODING):
    if (mode is Mode.NUMERIC):
        append_numeric_bytes(content, bits)
    elif (mode is Mode.ALPHANUMERIC):
        append_alphanumeric_bytes(content, bits)
    elif (mode is Mode.BYTE):
        append_8bit_bytes(content, bits, encoding)
    else:
        raise InternalConsistencyError(f"Invalid mode: {mode}")


def append_numeric_bytes(content : str, bits : BitBuffer):
    length = len(content)
    n = 0

    while (n < length):
        num1 = ord(content[n]) - ord("0")

        if (n + 2 < length):
            # three digits in ten bits
            num2 = ord(content[n + 1]) - ord("0")
            num3 = ord(content[n + 2]) - ord("0")
            bits.append_bits(num1 * 100 + num2 * 10 + num3, 10)
            n += 3
        elif (n + 1 < length):
            # two digits in seven bits
            num2 = ord(content[n + 1]) - ord("0")
            bits.append_bits(num1 * 10 + num2, 7)
            n += 2
        else:
            # one digit in four bits
            bits.append_bits(num1, 4)
            n += 1


def append_alphanumeric_bytes(content : str, bits : BitBuffer):
    length = len(content)
    n = 0

    while (n < length):
        code1 = get_alphanumeric_code(content[n])

        if (code1 == -1):
            raise EncodingError(f"Illegal character '{content[n]}' in alphanumeric mode")

        if (n + 1 < length):
            code2 = get_alphanumeric_code(content[n + 1])

            if (code2 == -1):
                raise EncodingError(f"Illegal character '{content[n + 1]}' in alphanumeric mode")

            # two characters in eleven bits
            bits.append_bits(code1 * 45 + code2, 11)
            n += 2
        else:
            bits.append_bits(code1, 6)
            n += 1


def append_8bit_bytes(content : str, bits : BitBuffer, encoding : str):
    try:
        data = content.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise EncodingError(f"Cannot encode phrase as {encoding}: {e}") from e

    logger.debug("Byte mode: %d characters -> %d bytes (%s)", len(content), len(data), encoding)

    for byte in data:
        bits.append_bits(byte, 8)
