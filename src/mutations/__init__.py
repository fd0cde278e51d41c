"""
Image Mutations Module
======================

This package contains all available `ImageMutation` implementations.

Each mutation represents a single, well-defined transformation that can
be applied to an `IntensityImage`. Mutations are designed to be composable and
can be chained together using a pipeline (e.g. `returns.pipeline.flow`).
"""

from .background import NormalizeBackground


__all__ = ["NormalizeBackground"]
