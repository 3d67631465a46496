#
# Exceptions raised while building a QR-code. Every failure aborts the
# whole encode call, there are no partial results.
#

class WriterException(Exception):
    """Base class for everything the encoder raises on purpose."""


class InvalidArgumentError(WriterException, ValueError):
    """Malformed call parameters, e.g. bit counts out of range."""


class EncodingError(WriterException, ValueError):
    """Input contains a character the selected mode or charset cannot carry."""


class DataTooBigError(WriterException, ValueError):
    """The payload does not fit any (or the requested) version."""


class DivisionByZeroError(WriterException, ZeroDivisionError):
    """Inverse or division of the field zero element / zero polynomial."""


class InternalConsistencyError(WriterException, RuntimeError):
    """
    An invariant the encoder itself maintains was broken. This is a bug,
    not a problem with the input, and should not be retried.
    """


class IndexOutOfRangeError(WriterException, IndexError):
    """Grid coordinates outside of the grid."""
