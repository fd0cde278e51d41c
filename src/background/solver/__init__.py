from background.solver.basis import basis_powers, basis_size, build_basis
from background.solver.transforms import compute_monomial_tables, normalize_position
from background.solver.grid import select_samples
from background.solver.design import build_design_matrix
from background.solver.core import (
    compute_root_mean_square,
    fit_surface,
    solve_least_squares,
)
from background.solver.evaluate import evaluate_surface

__all__ = (
    "basis_powers",
    "basis_size",
    "build_basis",
    "build_design_matrix",
    "compute_monomial_tables",
    "compute_root_mean_square",
    "evaluate_surface",
    "fit_surface",
    "normalize_position",
    "select_samples",
    "solve_least_squares",
)
