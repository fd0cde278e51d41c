import numpy as np
from loguru import logger
from numpy.typing import ArrayLike

from background.data_types import BackgroundEstimate, BackgroundModel
from background.solver import (
    build_basis,
    compute_monomial_tables,
    compute_root_mean_square,
    fit_surface,
    select_samples,
)
from container_models.base import BackgroundData
from exceptions import (
    ImageShapeMismatchError,
    InsufficientSamplesError,
    UnsupportedArityError,
)


def fit_background(
    image: ArrayLike, mask: ArrayLike, max_degree: int, sampling_step: int = 1
) -> BackgroundModel:
    """
    Fit a polynomial background model to the intensities of the masked pixels.

    The pixel coordinates are normalized with respect to the full image extent, so
    the resulting model can be evaluated at full resolution whatever the sampling step.

    :param image: 2D array with the intensities of a single channel.
    :param mask: 2D boolean array of the same shape, `True` for background pixels.
    :param max_degree: The maximal total degree of the polynomial (2 or 3 is often sufficient).
    :param sampling_step: Stride used to sample the mask, larger values reduce computation time.
    :returns: The fitted `BackgroundModel`.
    :raises ImageShapeMismatchError: If the image and mask shapes differ.
    :raises InsufficientSamplesError: If fewer samples than coefficients are selected.
    """
    image = np.asarray(image)
    mask = np.asarray(mask, dtype=np.bool_)
    if image.ndim != 2:
        raise UnsupportedArityError(
            f"Expected a single channel 2D image, but got an array of shape {image.shape}"
        )
    if image.shape != mask.shape:
        raise ImageShapeMismatchError(
            f"Mask shape: {mask.shape} does not match image shape: {image.shape}"
        )

    # Build the basis and select the background samples
    monomials = build_basis(max_degree)
    samples = select_samples(image, mask, sampling_step)
    if (sample_count := len(samples.values)) < len(monomials):
        raise InsufficientSamplesError(sample_count, len(monomials))

    # Fit the surface by solving the least-squares problem
    height, width = image.shape
    tables = compute_monomial_tables(width, height, monomials)
    result = fit_surface(samples, tables)
    residual_rms = compute_root_mean_square(samples.values - result.fitted_values)

    logger.debug(
        f"Fitted background polynomial of degree {max_degree} ({len(monomials)} terms) "
        f"on {sample_count} samples, residual RMS {residual_rms:.4g}"
    )
    return BackgroundModel(
        max_degree=max_degree,
        monomials=monomials,
        coefficients=result.coefficients,
        sample_count=sample_count,
        residual_rms=residual_rms,
    )


def evaluate_background(model: BackgroundModel, width: int, height: int) -> BackgroundData:
    """
    Evaluate a background model on a grid of the given size.

    :param model: The fitted background model.
    :param width: Number of columns of the grid, normally the width of the fitted image.
    :param height: Number of rows of the grid, normally the height of the fitted image.
    :returns: A new float64 array of shape (height, width), not clamped to the intensity range.
    """
    return model.evaluate(width, height)


def estimate_background(
    image: ArrayLike, mask: ArrayLike, max_degree: int, sampling_step: int = 1
) -> BackgroundEstimate:
    """
    Estimate a background image by fitting a polynomial model to the values of the
    input image within the mask.

    :param image: 2D array used to estimate the background model.
    :param mask: 2D boolean array of the background pixels to fit.
    :param max_degree: The maximal total degree of the polynomial.
    :param sampling_step: Stride used to sample the mask (1 = all pixels).
    :returns: An instance of `BackgroundEstimate` with the model and the background
        evaluated on the full image extent.
    """
    image = np.asarray(image)
    model = fit_background(image, mask, max_degree, sampling_step)
    height, width = image.shape
    return BackgroundEstimate(
        model=model, background=evaluate_background(model, width, height)
    )
