"""
Background Image Mutations
==========================

Mutations that change the *intensity* of pixels relative to an estimated
background, without changing the geometry of the image.
"""

from __future__ import annotations

import numpy as np
from loguru import logger

from container_models import IntensityImage
from container_models.base import BinaryMask
from mutations.base import ImageMutation
from normalization import normalize_background
from settings import BackgroundSettings, get_settings


class NormalizeBackground(ImageMutation):
    """
    Image mutation that flattens the illumination of an image.

    A polynomial surface is fitted to the intensities of the background pixels
    given by the mask, and every channel is divided by its fitted background.
    The ratio is mapped to 8 bits, `lower` becoming 0 and `upper` 255.
    """

    def __init__(
        self,
        mask: BinaryMask,
        max_degree: int = 2,
        sampling_step: int = 4,
        lower: float = 0.0,
        upper: float = 1.0,
    ) -> None:
        """
        Initialize the NormalizeBackground mutation.

        :param mask: Binary mask of the background pixels (`True`) used for fitting.
        :param max_degree: The maximal degree of the background polynomial.
        :param sampling_step: Stride used to sample the mask.
        :param lower: The image/background ratio mapped to 0.
        :param upper: The image/background ratio mapped to 255.
        """
        self.mask = np.asarray(mask, dtype=np.bool_)
        self.max_degree = max_degree
        self.sampling_step = sampling_step
        self.lower = lower
        self.upper = upper

    @classmethod
    def from_settings(
        cls, mask: BinaryMask, settings: BackgroundSettings | None = None
    ) -> NormalizeBackground:
        """Create the mutation with the parameters of `settings` (the cached settings by default)."""
        settings = settings or get_settings()
        return cls(
            mask=mask,
            max_degree=settings.max_degree,
            sampling_step=settings.sampling_step,
            lower=settings.lower,
            upper=settings.upper,
        )

    def apply_on_image(self, image: IntensityImage) -> IntensityImage:
        """
        Normalize the background of every channel of the image.

        :param image: Input image with one or three channels.
        :returns: A new `IntensityImage` with the same shape as the input.
        :raises ImageShapeMismatchError: If the mask does not match the image size.
        :raises InsufficientSamplesError: If the mask holds too few samples for the polynomial.
        """
        logger.info(
            f"Normalizing background with a degree {self.max_degree} polynomial "
            f"on {image.channel_count} channel(s)"
        )
        return IntensityImage(
            data=normalize_background(
                image.data,
                self.mask,
                max_degree=self.max_degree,
                sampling_step=self.sampling_step,
                lower=self.lower,
                upper=self.upper,
            )
        )
