"""Resource limits for rendering requests.

This module provides configurable limits that keep a single request from
allocating unbounded memory, either through a huge rasterization target or
an oversized logo payload.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# WebP hard limit for image dimensions (16383 pixels)
WEBP_MAX_DIMENSION = 16383

# 20MB is far beyond any reasonable logo
DEFAULT_MAX_LOGO_SIZE = 20 * 1024 * 1024


@dataclass
class ResourceLimits:
    """Resource limits for rendering operations.

    Limits can be configured via environment variables or constructor
    parameters. Constructor parameters take precedence over environment
    variables. A value of 0 disables the corresponding limit.

    Environment variables:
        QR2SVG_MAX_IMAGE_DIMENSION: Maximum raster width or height in pixels
            (default: 16383 = WebP limit)
        QR2SVG_MAX_LOGO_SIZE: Maximum encoded logo size in bytes
            (default: 20971520 = 20MB)

    Example:
        >>> limits = ResourceLimits.default()
        >>> limits = ResourceLimits(max_image_dimension=4096)
        >>> limits = ResourceLimits(max_logo_size=0)  # No logo size limit
    """

    max_image_dimension: int = WEBP_MAX_DIMENSION
    max_logo_size: int = DEFAULT_MAX_LOGO_SIZE

    @classmethod
    def default(cls) -> "ResourceLimits":
        """Create ResourceLimits with values from environment variables.

        Raises:
            ValueError: If an environment variable is not a valid integer.

        Note:
            Negative values are treated as 0 (disabled limit) with a warning.
        """

        def parse_env_int(key: str, default: int) -> int:
            value_str = os.environ.get(key)
            if value_str is None:
                return default

            try:
                value = int(value_str)
            except ValueError as e:
                raise ValueError(
                    f"Environment variable {key}={value_str!r} is not a valid integer"
                ) from e

            if value < 0:
                logger.warning(
                    f"Environment variable {key}={value} is negative, "
                    f"treating as 0 (disabled limit). "
                    f"Consider using ResourceLimits.unlimited() instead."
                )
                return 0

            return value

        return cls(
            max_image_dimension=parse_env_int(
                "QR2SVG_MAX_IMAGE_DIMENSION", WEBP_MAX_DIMENSION
            ),
            max_logo_size=parse_env_int("QR2SVG_MAX_LOGO_SIZE", DEFAULT_MAX_LOGO_SIZE),
        )

    @classmethod
    def unlimited(cls) -> "ResourceLimits":
        """Create ResourceLimits with all limits disabled.

        Warning:
            Only use this for trusted input in controlled environments.
        """
        return cls(max_image_dimension=0, max_logo_size=0)

    def is_image_dimension_limited(self) -> bool:
        """Check if image dimension limit is enabled."""
        return self.max_image_dimension > 0

    def is_logo_size_limited(self) -> bool:
        """Check if logo size limit is enabled."""
        return self.max_logo_size > 0
