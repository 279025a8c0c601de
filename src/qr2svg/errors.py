"""Exception types raised by the rendering pipeline.

Every error carries a ``stage`` attribute naming the pipeline stage that
failed, so callers can report where a request went wrong.
"""


class QR2SVGError(Exception):
    """Base class for all qr2svg errors."""

    stage = "unknown"


class MatrixEncodingError(QR2SVGError):
    """The QR matrix source could not encode the given text."""

    stage = "matrix"


class InvalidGeometry(QR2SVGError, ValueError):
    """Module count, target size or margin cannot produce a valid layout."""

    stage = "geometry"


class InvalidColorFormat(QR2SVGError, ValueError):
    """A color string is not in ``#RRGGBB`` form."""

    stage = "color"


class InvalidRatio(QR2SVGError, ValueError):
    """A logo size ratio would not produce a logo that fits the canvas."""

    stage = "logo"


class LogoDecodeError(QR2SVGError):
    """Logo data is not a supported image encoding."""

    stage = "logo"


class RasterizeError(QR2SVGError):
    """A vector document could not be rasterized."""

    stage = "rasterize"


class EncodeError(QR2SVGError):
    """A pixel canvas could not be serialized to an image format."""

    stage = "encode"
