"""
Railway-oriented programming entry points.

Operations are chained on a "railway" with two tracks: a success track and a
failure track. Every mutation returns a `returns` `Result` container, so a
failing step switches the pipeline to the failure track and the remaining
steps are skipped without explicit error checking.

`normalize_image_background` is the railway entry point for background
normalization; its result can be chained further with `returns.pointfree.bind`.
"""

from returns.result import ResultE

from container_models import IntensityImage
from container_models.base import BinaryMask
from mutations import NormalizeBackground
from settings import BackgroundSettings
from utils.logger import log_railway_function


@log_railway_function(
    failure_message="Failed to normalize image background",
    success_message="Successfully normalized image background",
)
def normalize_image_background(
    image: IntensityImage,
    mask: BinaryMask,
    settings: BackgroundSettings | None = None,
) -> ResultE[IntensityImage]:
    """
    Normalize the background of an image on the railway.

    :param image: The image to normalize, with one or three channels.
    :param mask: Binary mask of the background pixels.
    :param settings: Fit and normalization parameters, the cached settings by default.
    :returns: `Success` with the normalized `IntensityImage`, or `Failure` with the raised exception.
    """
    return NormalizeBackground.from_settings(mask, settings)(image)
