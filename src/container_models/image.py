"""Intensity image container.

::

    +--------------------------------------+
    |           IntensityImage             |
    |--------------------------------------|
    | data          : IntensityData        |
    | height        : int (rows)           |
    | width         : int (columns)        |
    | channel_count : int                  |
    +--------------------------------------+
    | channels() -> Iterator[UInt8Array2D] |
    | from_channels(channels) -> cls       |
    +--------------------------------------+

- Stores 8-bit intensities as a 2D ``(H, W)`` or 3D ``(H, W, C)`` array.
- Compared by data equality.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import numpy as np
from pydantic import ConfigDict

from container_models.base import ConfigBaseModel, IntensityData, UInt8Array2D


class IntensityImage(ConfigBaseModel):
    data: IntensityData

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="forbid",
        regex_engine="rust-regex",
        revalidate_instances="always",
    )

    @property
    def height(self) -> int:
        """Return the height (number of rows) of the image."""
        return self.data.shape[0]

    @property
    def width(self) -> int:
        """Return the width (number of columns) of the image."""
        return self.data.shape[1]

    @property
    def channel_count(self) -> int:
        """Return the number of channels, 1 for a 2D image."""
        return 1 if self.data.ndim == 2 else self.data.shape[2]

    def channels(self) -> Iterator[UInt8Array2D]:
        """Iterate over the channels of the image as 2D arrays."""
        if self.data.ndim == 2:
            yield self.data
            return
        for index in range(self.data.shape[2]):
            yield self.data[:, :, index]

    @classmethod
    def from_channels(cls, channels: Sequence[UInt8Array2D]) -> IntensityImage:
        """Stack single channel arrays into a multi-channel image."""
        return cls(data=np.stack(channels, axis=-1))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntensityImage):
            return NotImplemented
        return np.array_equal(self.data, other.data)
