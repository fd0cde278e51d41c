import numpy as np
from loguru import logger
from numpy.typing import ArrayLike

from container_models.base import UInt8Array2D
from exceptions import ImageShapeMismatchError

MAX_INTENSITY = 255


def normalize_bright_background(
    image: ArrayLike,
    background: ArrayLike,
    lower: float = 0.0,
    upper: float = 1.0,
) -> UInt8Array2D:
    """
    Divide an image by its (bright) background estimate and map the ratio to 8 bits.

    The ratio of image and background is expected to lie between `lower` and `upper`;
    `lower` is mapped to 0 and `upper` to 255, values outside are saturated. Narrowing
    the bounds enhances the contrast of the result.

    Where the background is exactly zero, the ratio is taken as +inf, so these
    pixels saturate (to 255 when ``upper > lower``) instead of raising a division error.

    :param image: 2D array with the intensities to normalize.
    :param background: 2D array with the background estimate, same shape as `image`.
    :param lower: The ratio mapped to 0.
    :param upper: The ratio mapped to 255.
    :returns: A new uint8 array with the normalized result of the division.
    """
    image = np.asarray(image, dtype=np.float64)
    background = np.asarray(background, dtype=np.float64)
    if image.shape != background.shape:
        raise ImageShapeMismatchError(
            f"Background shape: {background.shape} does not match image shape: {image.shape}"
        )
    if upper == lower:
        raise ValueError(f"Normalization bounds must differ, got lower={lower} and upper={upper}")

    zero_background = background == 0
    if zero_count := int(np.count_nonzero(zero_background)):
        logger.warning(
            f"Background estimate is zero at {zero_count} pixel(s), saturating their ratio"
        )
    ratio = np.divide(
        image, background, out=np.full_like(image, np.inf), where=~zero_background
    )

    scaled = MAX_INTENSITY * (ratio - lower) / (upper - lower)
    return np.clip(np.rint(scaled), 0, MAX_INTENSITY).astype(np.uint8)
