import numpy as np
from loguru import logger
from numpy.typing import ArrayLike, NDArray

from background import estimate_background
from container_models.base import UInt8Array2D
from exceptions import ImageShapeMismatchError, UnsupportedArityError
from normalization.ratio import normalize_bright_background
from settings import get_settings

SUPPORTED_CHANNEL_COUNTS = (1, 3)


def _normalize_channel(
    channel: NDArray,
    mask: NDArray[np.bool_],
    max_degree: int,
    sampling_step: int,
    lower: float,
    upper: float,
) -> UInt8Array2D:
    """Fit the background of a single channel and divide the channel by it."""
    estimate = estimate_background(channel, mask, max_degree, sampling_step)
    return normalize_bright_background(channel, estimate.background, lower, upper)


def normalize_background(
    image: ArrayLike,
    mask: ArrayLike,
    max_degree: int | None = None,
    sampling_step: int | None = None,
    lower: float | None = None,
    upper: float | None = None,
) -> NDArray[np.uint8]:
    """
    Normalize the background of an image, assuming dark structures over a bright
    background that can be modelled with a polynomial of the coordinates.

    Each channel of a multi-channel image is fitted and normalized independently.
    Parameters left to `None` are taken from the settings.

    :param image: 2D array (H, W) or 3D array (H, W, C) with C equal to 1 or 3.
    :param mask: 2D boolean array (H, W) of the background pixels.
    :param max_degree: The maximal degree of the fitting polynomial.
    :param sampling_step: Stride used to sample the mask when fitting.
    :param lower: The image/background ratio mapped to 0.
    :param upper: The image/background ratio mapped to 255.
    :returns: A new uint8 array with the same shape as `image`.
    :raises UnsupportedArityError: If the image shape or data type is not supported.
    :raises ImageShapeMismatchError: If the mask does not match the image size.
    """
    if None in (max_degree, sampling_step, lower, upper):
        settings = get_settings()
        max_degree = settings.max_degree if max_degree is None else max_degree
        sampling_step = settings.sampling_step if sampling_step is None else sampling_step
        lower = settings.lower if lower is None else lower
        upper = settings.upper if upper is None else upper

    if upper == lower:
        raise ValueError(f"Normalization bounds must differ, got lower={lower} and upper={upper}")

    image = np.asarray(image)
    mask = np.asarray(mask, dtype=np.bool_)
    if not (
        np.issubdtype(image.dtype, np.integer) or np.issubdtype(image.dtype, np.floating)
    ):
        raise UnsupportedArityError(
            f"Unable to handle image with data type {image.dtype} and shape {image.shape}"
        )
    if image.ndim not in (2, 3) or (
        image.ndim == 3 and image.shape[2] not in SUPPORTED_CHANNEL_COUNTS
    ):
        raise UnsupportedArityError(
            f"Unable to handle image with shape {image.shape}, expected (H, W) or "
            f"(H, W, C) with C in {SUPPORTED_CHANNEL_COUNTS}"
        )
    if mask.shape != image.shape[:2]:
        raise ImageShapeMismatchError(
            f"Mask shape: {mask.shape} does not match image shape: {image.shape[:2]}"
        )

    if image.ndim == 2:
        return _normalize_channel(image, mask, max_degree, sampling_step, lower, upper)

    channel_count = image.shape[2]
    result = np.empty(image.shape, dtype=np.uint8)
    for index in range(channel_count):
        logger.debug(f"Normalizing background of channel {index + 1}/{channel_count}")
        result[:, :, index] = _normalize_channel(
            image[:, :, index], mask, max_degree, sampling_step, lower, upper
        )
    return result
