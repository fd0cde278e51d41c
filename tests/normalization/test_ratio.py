import warnings

import numpy as np
import pytest

from exceptions import ImageShapeMismatchError
from normalization import MAX_INTENSITY, normalize_bright_background


class TestNormalizeBrightBackground:
    def test_image_equal_to_background_is_white(self):
        # Arrange
        image = np.array([[10, 100], [200, 255]], dtype=np.uint8)
        # Act
        result = normalize_bright_background(image, image.astype(np.float64))
        # Assert
        assert result.dtype == np.uint8
        assert np.all(result == MAX_INTENSITY)

    @pytest.mark.parametrize(
        "pixel, expected",
        [
            pytest.param(0, 0, id="black"),
            pytest.param(50, 128, id="half_rounds_to_even"),
            pytest.param(25, 64, id="quarter"),
            pytest.param(150, 255, id="brighter_than_background_saturates"),
        ],
    )
    def test_ratio_is_mapped_to_eight_bits(self, pixel: int, expected: int):
        image = np.full((2, 3), pixel, dtype=np.uint8)
        background = np.full((2, 3), 100.0)

        result = normalize_bright_background(image, background)

        assert np.all(result == expected)

    def test_narrow_bounds_stretch_contrast(self):
        image = np.array([[25, 50, 75, 100]])
        background = np.full((1, 4), 100.0)

        result = normalize_bright_background(image, background, lower=0.5, upper=1.0)

        assert result.tolist() == [[0, 0, 128, 255]]

    def test_inverted_bounds_invert_the_result(self):
        image = np.array([[0, 100]])
        background = np.full((1, 2), 100.0)

        result = normalize_bright_background(image, background, lower=1.0, upper=0.0)

        assert result.tolist() == [[255, 0]]

    def test_negative_background_saturates_to_black(self):
        result = normalize_bright_background(np.full((2, 2), 100), np.full((2, 2), -100.0))
        assert np.all(result == 0)

    def test_zero_background_saturates_without_numpy_warning(self, caplog):
        image = np.array([[0, 80], [100, 100]], dtype=np.uint8)
        background = np.array([[0.0, 0.0], [100.0, 200.0]])

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = normalize_bright_background(image, background)

        assert result.tolist() == [[255, 255], [255, 128]]
        assert "zero at 2 pixel(s)" in caplog.text

    def test_inputs_are_not_modified(self):
        image = np.full((3, 3), 40, dtype=np.uint8)
        background = np.full((3, 3), 80.0)

        normalize_bright_background(image, background)

        assert np.all(image == 40)
        assert np.all(background == 80.0)

    def test_shape_mismatch_raises(self):
        with pytest.raises(ImageShapeMismatchError, match="Background shape"):
            normalize_bright_background(np.zeros((4, 4)), np.ones((4, 5)))

    def test_equal_bounds_raise(self):
        with pytest.raises(ValueError, match="bounds must differ"):
            normalize_bright_background(np.ones((2, 2)), np.ones((2, 2)), lower=0.5, upper=0.5)
