from functools import lru_cache

import numpy as np
from numpy.typing import ArrayLike, NDArray

from background.data_types import Basis, MonomialTables
from background.solver.basis import basis_powers

# Normalized coordinates span [-1.5, 1.5) over the full image extent
COORDINATE_RANGE = 3.0


def normalize_position(indices: ArrayLike, size: int) -> NDArray[np.float64]:
    """
    Convert pixel indices along an axis of length `size` to normalized coordinates.

    Indices in ``[0, size)`` are mapped to ``[-1.5, 1.5)``, which keeps the powers of
    high degree monomials bounded and the least-squares system well conditioned.

    :param indices: Pixel indices along the axis.
    :param size: The full extent of the image along the axis.
    :returns: The normalized coordinates.
    """
    return (np.asarray(indices, dtype=np.float64) / size - 0.5) * COORDINATE_RANGE


def _axis_powers(size: int, powers: NDArray[np.intp]) -> NDArray[np.float64]:
    coordinates = normalize_position(np.arange(size), size)
    table = coordinates[:, np.newaxis] ** powers[np.newaxis, :]
    table.setflags(write=False)
    return table


@lru_cache(maxsize=8)
def compute_monomial_tables(width: int, height: int, monomials: Basis) -> MonomialTables:
    """
    Pre-compute the powers of the normalized coordinates for every monomial.

    The tables depend only on the image extent and the basis, so they are cached and
    shared between fitting and evaluation. The returned arrays are read-only.

    :param width: Number of columns of the image.
    :param height: Number of rows of the image.
    :param monomials: The polynomial basis.
    :returns: An instance of `MonomialTables` with a (width, K) and a (height, K) table.
    """
    x_powers, y_powers = basis_powers(monomials)
    return MonomialTables(x=_axis_powers(width, x_powers), y=_axis_powers(height, y_powers))
