import numpy as np

from background.data_types import SampleSet
from container_models.base import BinaryMask


def select_samples(image: np.ndarray, mask: BinaryMask, sampling_step: int) -> SampleSet:
    """
    Select the background samples used for fitting.

    Pixels are candidates when both their column and row index are multiples of
    `sampling_step`; of those, only the pixels inside the mask are kept. Samples
    are ordered row by row.

    :param image: 2D array with the intensity values.
    :param mask: 2D boolean array, `True` for background pixels.
    :param sampling_step: Stride of the sampling grid in both directions.
    :returns: An instance of `SampleSet` with the pixel indices and the intensities as floats.
    """
    if sampling_step < 1:
        raise ValueError(f"Sampling step must be at least 1, got {sampling_step}")

    ys, xs = np.nonzero(mask[::sampling_step, ::sampling_step])
    ys *= sampling_step
    xs *= sampling_step
    return SampleSet(xs=xs, ys=ys, values=image[ys, xs].astype(np.float64))
