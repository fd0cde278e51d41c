from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray
from pydantic import ConfigDict, Field, field_validator, model_validator

from container_models.base import (
    BackgroundData,
    Coefficients,
    ConfigBaseModel,
    FloatArray2D,
)


class Monomial(NamedTuple):
    """Exponents of a single term ``x**degree_x * y**degree_y`` of a 2D polynomial."""

    degree_x: int
    degree_y: int

    @property
    def degree(self) -> int:
        """Total degree of the term."""
        return self.degree_x + self.degree_y


# Ordered sequence of monomials, index 0 is always the constant term
type Basis = tuple[Monomial, ...]


class MonomialTables(NamedTuple):
    """
    Powers of the normalized pixel coordinates for every monomial of a basis.

    :param x: Array of shape (width, K) with ``x̂**degree_x[c]`` for column ``x`` and term ``c``.
    :param y: Array of shape (height, K) with ``ŷ**degree_y[c]`` for row ``y`` and term ``c``.
    """

    x: FloatArray2D
    y: FloatArray2D


class SampleSet(NamedTuple):
    """Background samples selected from an image: column indices, row indices and intensities."""

    xs: NDArray[np.intp]
    ys: NDArray[np.intp]
    values: NDArray[np.float64]


class BackgroundModel(ConfigBaseModel):
    """
    A fitted polynomial background.

    The surface is a pure function of the basis and the coefficients, so a model
    can be evaluated on any grid whose coordinates are normalized the same way.

    :param max_degree: The maximal total degree of the polynomial.
    :param monomials: The basis the coefficients refer to, in coefficient order.
    :param coefficients: One coefficient per monomial.
    :param sample_count: Number of background samples the model was fitted on.
    :param residual_rms: Root mean square of the fit residuals at the samples.
    """

    max_degree: int = Field(..., ge=0)
    monomials: tuple[Monomial, ...]
    coefficients: Coefficients
    sample_count: int = Field(..., ge=0)
    residual_rms: float = Field(..., ge=0.0)

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra="forbid",
        regex_engine="rust-regex",
    )

    @field_validator("coefficients")
    @classmethod
    def _read_only_copy(cls, coefficients: NDArray[np.float64]) -> NDArray[np.float64]:
        coefficients = np.array(coefficients, dtype=np.float64)
        coefficients.setflags(write=False)
        return coefficients

    @model_validator(mode="after")
    def _check_coefficient_count(self) -> "BackgroundModel":
        if len(self.coefficients) != len(self.monomials):
            raise ValueError(
                f"Got {len(self.coefficients)} coefficient(s) for {len(self.monomials)} monomial(s)"
            )
        return self

    @property
    def basis_size(self) -> int:
        """Number of terms in the polynomial."""
        return len(self.monomials)

    def evaluate(self, width: int, height: int) -> BackgroundData:
        """Evaluate the background surface on a grid of ``height`` rows and ``width`` columns."""
        # Deferred, background.solver imports this module
        from background.solver import evaluate_surface

        return evaluate_surface(self.coefficients, self.monomials, width, height)


class BackgroundEstimate(ConfigBaseModel):
    """
    Result of a background estimation.

    :param model: The fitted polynomial background model.
    :param background: 2D array of the evaluated background (same shape as the input image).
    """

    model: BackgroundModel
    background: BackgroundData
