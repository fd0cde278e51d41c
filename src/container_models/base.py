from collections.abc import Sequence
from functools import partial
from typing import Annotated

from numpy import array, bool_, float64, number, uint8
from numpy.typing import DTypeLike, NDArray
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
)


class ConfigBaseModel(BaseModel):
    """Base model for containers that carry numpy arrays."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="forbid",
        regex_engine="rust-regex",
    )


def serialize_ndarray[T: number | bool_](array_: NDArray[T]) -> list:
    """Serialize numpy array to a Python list for JSON serialization."""
    return array_.tolist()


def coerce_to_array[T: number | bool_](
    dtype: DTypeLike, value: Sequence | NDArray[T] | None
) -> NDArray[T] | None:
    """
    Coerce input to dtype numpy array.

    Handles JSON deserialization where Python creates int64 integers by default.
    """
    if isinstance(value, Sequence):
        try:
            return array(value, dtype=dtype)
        except OverflowError as ofe:
            raise ValueError("Array's value(s) out of range") from ofe

    return value


def validate_shape(n_dims: int | tuple[int, ...], value: NDArray) -> NDArray:
    allowed = (n_dims,) if isinstance(n_dims, int) else n_dims
    if (array_dims := value.ndim) not in allowed:
        expected = " or ".join(map(str, allowed))
        raise ValueError(
            f"Array shape mismatch, expected {expected} dimension(s), but got {array_dims}"
        )
    return value


# Tier 1: Base types
type FloatArray = Annotated[
    NDArray[float64],
    BeforeValidator(partial(coerce_to_array, float64)),
    PlainSerializer(serialize_ndarray),
]
type BoolArray = Annotated[
    NDArray[bool_],
    BeforeValidator(partial(coerce_to_array, bool_)),
    PlainSerializer(serialize_ndarray),
]
type UInt8Array = Annotated[
    NDArray[uint8],
    BeforeValidator(partial(coerce_to_array, uint8)),
    PlainSerializer(serialize_ndarray),
]

# Tier 2: Shape and data types
type FloatArray1D = Annotated[FloatArray, AfterValidator(partial(validate_shape, 1))]
type FloatArray2D = Annotated[FloatArray, AfterValidator(partial(validate_shape, 2))]
type BoolArray2D = Annotated[BoolArray, AfterValidator(partial(validate_shape, 2))]
type UInt8Array2D = Annotated[UInt8Array, AfterValidator(partial(validate_shape, 2))]
type UInt8Array2Dor3D = Annotated[
    UInt8Array, AfterValidator(partial(validate_shape, (2, 3)))
]

# Tier 3: Semantic context
type IntensityData = UInt8Array2Dor3D  # Shape: (H, W) or (H, W, C)
type BackgroundData = FloatArray2D  # Shape: (H, W)
type BinaryMask = BoolArray2D  # Shape: (H, W)
type Coefficients = FloatArray1D  # Shape: (K,)
