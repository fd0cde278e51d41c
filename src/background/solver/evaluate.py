import numpy as np
from numpy.typing import NDArray

from background.data_types import Basis
from background.solver.transforms import compute_monomial_tables
from container_models.base import BackgroundData


def evaluate_surface(
    coefficients: NDArray[np.float64], monomials: Basis, width: int, height: int
) -> BackgroundData:
    """
    Evaluate a polynomial surface on every pixel of a (height, width) grid.

    The value at pixel ``(x, y)`` is ``Σ_c θ[c]·x̂[x]^degree_x[c]·ŷ[y]^degree_y[c]``.
    Values are returned as computed, without clamping to any intensity range.

    :param coefficients: The polynomial coefficients, ordered as `monomials`.
    :param monomials: The polynomial basis.
    :param width: Number of columns of the output grid.
    :param height: Number of rows of the output grid.
    :returns: A new float64 array of shape (height, width).
    """
    if width < 1 or height < 1:
        raise ValueError(f"Grid size must be positive, got {width}x{height}")

    tables = compute_monomial_tables(width, height, tuple(monomials))
    # (H, K) @ (K, W) sums the per-term products of the y and x tables
    return tables.y @ (np.asarray(coefficients)[:, np.newaxis] * tables.x.T)
