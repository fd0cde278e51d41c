from typing import NamedTuple

import numpy as np
from loguru import logger
from numpy.typing import NDArray
from scipy.linalg import lstsq, qr, solve_triangular

from background.data_types import MonomialTables, SampleSet
from background.solver.design import build_design_matrix


class FitSurfaceResult(NamedTuple):
    coefficients: NDArray[np.float64]
    fitted_values: NDArray[np.float64]


def compute_root_mean_square(residuals: NDArray[np.float64]) -> float:
    """Compute the root-mean-square of the residuals, ignoring NaN values."""
    return float(np.sqrt(np.nanmean(np.square(residuals))))


def solve_least_squares(
    design_matrix: NDArray[np.float64], values: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Solve the linear least-squares problem ``min ||A·θ - b||`` with a QR factorization.

    A column-pivoted QR factorization orders the diagonal of R by decreasing
    magnitude, so a rank deficient design matrix shows up as a negligible
    trailing diagonal entry. Such a system has no unique solution; the
    minimum-norm solution is returned instead, which still reproduces the
    samples as well as any other solution.

    :param design_matrix: The (M, K) design matrix A.
    :param values: The M observed values b.
    :returns: The K coefficients θ.
    """
    q, r, permutation = qr(design_matrix, mode="economic", pivoting=True)
    diagonal = np.abs(np.diag(r))
    relative_tolerance = max(design_matrix.shape) * np.finfo(np.float64).eps
    tolerance = relative_tolerance * diagonal.max(initial=0.0)
    if (rank := int(np.count_nonzero(diagonal > tolerance))) < design_matrix.shape[1]:
        logger.warning(
            f"Design matrix has rank {rank}, but {design_matrix.shape[1]} coefficients are fitted; "
            "using the minimum-norm solution"
        )
        coefficients, *_ = lstsq(design_matrix, values, cond=relative_tolerance)
        return coefficients

    solution = solve_triangular(r, q.T @ values)
    coefficients = np.empty_like(solution)
    coefficients[permutation] = solution
    return coefficients


def fit_surface(samples: SampleSet, tables: MonomialTables) -> FitSurfaceResult:
    """
    Core solver: fits a polynomial surface to the background samples.

    :param samples: The selected background samples.
    :param tables: Monomial tables computed for the full image extent.
    :return: An instance of `FitSurfaceResult` with the coefficients and the surface values at the samples.
    """
    # 1. Build the design matrix for the least-squares solver
    design_matrix = build_design_matrix(tables, samples)

    # 2. Solve (Least Squares)
    coefficients = solve_least_squares(design_matrix, samples.values)

    # 3. Compute the surface at the sample positions from the fitted coefficients
    fitted_values = design_matrix @ coefficients

    return FitSurfaceResult(coefficients=coefficients, fitted_values=fitted_values)
