import logging
from collections.abc import Callable, Sequence

import numpy as np
import pytest
from loguru import logger
from numpy.typing import NDArray

from background.solver import build_basis, normalize_position


class PropagateHandler(logging.Handler):
    """Handler that propagates loguru records to standard logging."""

    def emit(self, record: logging.LogRecord) -> None:
        logging.getLogger(record.name).handle(record)


@pytest.fixture
def caplog(caplog):
    """Fixture to enable caplog to capture loguru logs."""
    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    logger.remove(handler_id)


type PolynomialImageFactory = Callable[[Sequence[float], int, int], NDArray[np.float64]]


@pytest.fixture(scope="session")
def polynomial_image() -> PolynomialImageFactory:
    """Factory fixture evaluating a polynomial of the normalized coordinates on a grid."""

    def _create(coefficients: Sequence[float], width: int, height: int) -> NDArray[np.float64]:
        max_degree = int((np.sqrt(8 * len(coefficients) + 1) - 3) / 2)
        monomials = build_basis(max_degree)
        assert len(monomials) == len(coefficients)
        xs = normalize_position(np.arange(width), width)[np.newaxis, :]
        ys = normalize_position(np.arange(height), height)[:, np.newaxis]
        return sum(
            coefficient * xs**monomial.degree_x * ys**monomial.degree_y
            for coefficient, monomial in zip(coefficients, monomials)
        ) * np.ones((height, width))

    return _create


@pytest.fixture
def constant_image() -> NDArray[np.uint8]:
    return np.full((4, 4), 100, dtype=np.uint8)


@pytest.fixture
def full_mask() -> NDArray[np.bool_]:
    return np.ones((4, 4), dtype=np.bool_)


@pytest.fixture(scope="session")
def illuminated_scene() -> tuple[NDArray[np.uint8], NDArray[np.bool_]]:
    """
    Build an RGB image of dark squares on a bright background with a linear
    illumination gradient per channel, together with the background mask.
    """
    height, width = 32, 40
    ys, xs = np.mgrid[0:height, 0:width]
    mask = np.ones((height, width), dtype=np.bool_)
    mask[8:16, 10:20] = False
    mask[20:28, 24:34] = False

    channels = []
    for offset, slope_x, slope_y in ((150, 40, 20), (170, 30, -25), (120, -35, 45)):
        background = offset + slope_x * xs / width + slope_y * ys / height
        channel = np.where(mask, background, background / 2)
        channels.append(np.rint(channel))
    return np.stack(channels, axis=-1).astype(np.uint8), mask
