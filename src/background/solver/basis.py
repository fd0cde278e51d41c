import numpy as np
from numpy.typing import NDArray

from background.data_types import Basis, Monomial


def basis_size(max_degree: int) -> int:
    """Return the number of monomials of total degree up to `max_degree` (Gauss' relation)."""
    return (max_degree + 1) * (max_degree + 2) // 2


def build_basis(max_degree: int) -> Basis:
    """
    Enumerate the monomials of a 2D polynomial with total degree up to `max_degree`.

    Monomials are grouped by ascending total degree, and within one degree by
    ascending exponent of y. The first monomial is always the constant term, so for
    `max_degree=2` the basis reads: 1, x, y, x², xy, y².

    :param max_degree: The maximal total degree of the polynomial.
    :returns: The ordered basis; coefficient arrays and design matrix columns follow this order.
    """
    if max_degree < 0:
        raise ValueError(f"Polynomial degree must be non-negative, got {max_degree}")
    return tuple(
        Monomial(degree_x=order - n, degree_y=n)
        for order in range(max_degree + 1)
        for n in range(order + 1)
    )


def basis_powers(monomials: Basis) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """Split a basis into the arrays of x-exponents and y-exponents."""
    x_powers = np.array([m.degree_x for m in monomials], dtype=np.intp)
    y_powers = np.array([m.degree_y for m in monomials], dtype=np.intp)
    return x_powers, y_powers
