#
# Render an encoded QR-code as an 8 bit greyscale bitmap.
#

import logging
import numpy as np
from PIL import Image
from . import qrcoder
from .exceptions import InvalidArgumentError
from .hints import EncodeHint, normalize_hints, get_int_hint
from .version import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

QR_BLACK = 0        # final pixel in black
QR_WHITE = 255      # final pixel in white


class QRCodeWriter(object):
    QUIET_ZONE_SIZE = 4

    #
    def encode(self, contents : str, width : int=0, height : int=0, hints=None) -> np.ndarray:
        """
        Encode contents and render it at least width x height pixels.

        Parameters:
        -----------
        contents : str
            Phrase to encode.
        width, height : int
            Requested bitmap size. The symbol is scaled by the largest
            integer that fits and centered; a too small size gives the
            symbol at one pixel per module.
        hints : dict
            EncodeHint mapping. ERROR_CORRECTION (default L) and MARGIN
            (quiet zone in modules, default 4) are used here, the rest is
            passed to the encoder.

        Return:
        -------
            numpy uint8 array, 0 for dark and 255 for light pixels.
        """
        if (not contents):
            raise InvalidArgumentError("Found empty contents")

        if (width < 0 or height < 0):
            raise InvalidArgumentError(f"Requested dimensions are too small: {width}x{height}")

        hints = normalize_hints(hints)
        ec_level = ErrorCorrectionLevel.parse(hints.get(EncodeHint.ERROR_CORRECTION, ErrorCorrectionLevel.L))
        quiet_zone = get_int_hint(hints, EncodeHint.MARGIN, QRCodeWriter.QUIET_ZONE_SIZE)

        if (quiet_zone < 0):
            raise InvalidArgumentError(f"Negative margin {quiet_zone}")

        code = qrcoder.encode(contents, ec_level, hints)
        return QRCodeWriter.render_result(code, width, height, quiet_zone)

    #
    @staticmethod
    def render_result(code, width : int, height : int, quiet_zone : int) -> np.ndarray:
        modules = code.matrix

        if (modules is None):
            raise InvalidArgumentError("QR-code has no matrix")

        input_width = modules.width
        input_height = modules.height
        qr_width = input_width + quiet_zone * 2
        qr_height = input_height + quiet_zone * 2
        output_width = max(width, qr_width)
        output_height = max(height, qr_height)

        multiple = min(output_width // qr_width, output_height // qr_height)

        # Padding includes both the quiet zone and the extra white pixels to
        # accommodate the requested dimensions.
        left = (output_width - input_width * multiple) // 2
        top = (output_height - input_height * multiple) // 2

        output = np.full((output_height, output_width), QR_WHITE, dtype=np.uint8)
        dark = np.repeat(np.repeat(modules.array == 1, multiple, axis=0), multiple, axis=1)
        region = output[top:top + input_height * multiple, left:left + input_width * multiple]
        region[dark] = QR_BLACK

        logger.debug("Rendered %dx%d modules into %dx%d pixels, scale %d",
                     input_width, input_height, output_width, output_height, multiple)
        return output

    #
    @staticmethod
    def to_image(bitmap : np.ndarray) -> Image.Image:
        return Image.fromarray(bitmap)


def generate_qr_code(phrase : str, ec_level="L", scale : int=1, margin : int=QRCodeWriter.QUIET_ZONE_SIZE) -> Image.Image:
    """Convenience wrapper: phrase in, Pillow greyscale image out."""
    hints = {EncodeHint.ERROR_CORRECTION: ec_level, EncodeHint.MARGIN: margin}
    writer = QRCodeWriter()
    bitmap = writer.encode(phrase, hints=hints)

    if (scale > 1):
        bitmap = np.repeat(np.repeat(bitmap, scale, axis=0), scale, axis=1)

    return QRCodeWriter.to_image(bitmap)
