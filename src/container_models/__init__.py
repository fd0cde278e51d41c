"""
Data container models for background normalization pipelines.

These pydantic models are the values passed between the railway functions and
image mutations of a pipeline. Array fields are validated on construction so
every step receives data of the expected dimensionality.
"""

from .image import IntensityImage


__all__ = ["IntensityImage"]
