#
# Character set name -> ECI assignment number.
#

import codecs
import logging

logger = logging.getLogger(__name__)


class CharacterSetECI(object):
    def __init__(self, value : int, name : str):
        self.value = value
        self.name = name

    def __repr__(self):
        return f"CharacterSetECI({self.value}, '{self.name}')"


# keyed by the codec name codecs.lookup() resolves to
eci_table_ = {
    "cp437": CharacterSetECI(2, "Cp437"),
    "iso8859-1": CharacterSetECI(3, "ISO-8859-1"),
    "iso8859-2": CharacterSetECI(4, "ISO-8859-2"),
    "iso8859-3": CharacterSetECI(5, "ISO-8859-3"),
    "iso8859-4": CharacterSetECI(6, "ISO-8859-4"),
    "iso8859-5": CharacterSetECI(7, "ISO-8859-5"),
    "iso8859-6": CharacterSetECI(8, "ISO-8859-6"),
    "iso8859-7": CharacterSetECI(9, "ISO-8859-7"),
    "iso8859-8": CharacterSetECI(10, "ISO-8859-8"),
    "iso8859-9": CharacterSetECI(11, "ISO-8859-9"),
    "iso8859-10": CharacterSetECI(12, "ISO-8859-10"),
    "iso8859-11": CharacterSetECI(13, "ISO-8859-11"),
    "iso8859-13": CharacterSetECI(15, "ISO-8859-13"),
    "iso8859-14": CharacterSetECI(16, "ISO-8859-14"),
    "iso8859-15": CharacterSetECI(17, "ISO-8859-15"),
    "iso8859-16": CharacterSetECI(18, "ISO-8859-16"),
    "shift_jis": CharacterSetECI(20, "Shift_JIS"),
    "cp1250": CharacterSetECI(21, "windows-1250"),
    "cp1251": CharacterSetECI(22, "windows-1251"),
    "cp1252": CharacterSetECI(23, "windows-1252"),
    "cp1256": CharacterSetECI(24, "windows-1256"),
    "utf-16-be": CharacterSetECI(25, "UTF-16BE"),
    "utf-8": CharacterSetECI(26, "UTF-8"),
    "ascii": CharacterSetECI(27, "US-ASCII"),
    "big5": CharacterSetECI(28, "Big5"),
    "gb18030": CharacterSetECI(29, "GB18030"),
    "gb2312": CharacterSetECI(29, "GB18030"),
    "gbk": CharacterSetECI(29, "GB18030"),
    "euc_kr": CharacterSetECI(30, "EUC-KR"),
}


def get_character_set_eci_by_name(name : str):
    """
    Returns the CharacterSetECI for an encoding name, or None when the
    name is unknown to Python or has no ECI assignment.
    """
    try:
        key = codecs.lookup(name).name
    except LookupError:
        logger.debug("Unknown character set '%s'", name)
        return None

    return eci_table_.get(key)
