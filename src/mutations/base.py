"""
Image Modifications Architecture
================================

This module defines how image modifications are structured and applied.

- :class:`~container_models.image.IntensityImage` holds 8-bit intensity data.
- :class:`ImageMutation` is an abstract interface for modifying an IntensityImage.
- Concrete mutations live in the ``mutations`` folder.
- Stateless functionality (such as the background solver) lives in the
  ``background`` and ``normalization`` packages.

High-level Design
-----------------

                        +---------------------------------+
                        |          IntensityImage         |
                        |---------------------------------|
                        | data     : IntensityData        |
                        +---------------+-----------------+
                                        |
                                        v
                    +-------------------+----------------------+
                    |              <<abstract>>                |
                    |              ImageMutation               |
                    |------------------------------------------|
                    | + apply_on_image(T) -> T                 |
                    | + skip_predicate: bool                   |
                    +--------------------+---------------------+
                                         ^
                                         |
                              +----------+-----------+
                              |  NormalizeBackground |
                              |----------------------|
                              | mask : BinaryMask    |
                              | max_degree : int     |
                              | sampling_step : int  |
                              | lower, upper : float |
                              +----------------------+
                              |    <<overwrite>>     |
                              |    apply_on_image    |
                              +----------------------+


Example
-------

    from container_models import IntensityImage
    from returns.pipeline import flow
    from returns.pointfree import bind
    from mutations import NormalizeBackground

    result = flow(
        IntensityImage(data=image),
        NormalizeBackground(mask=background_mask, max_degree=2, sampling_step=4),
        bind(NormalizeBackground(mask=background_mask, max_degree=3)),
    )
"""

from abc import ABC, abstractmethod

from returns.result import safe

from container_models import IntensityImage


class ImageMutation(ABC):
    """
    Represents a single mutation applied to an :class:`~container_models.image.IntensityImage`.

    After one `ImageMutation`, the resulting `IntensityImage` must be valid
    input for another mutation. This enables safe chaining in pipelines.

    All parameters required for the mutation should be provided via
    the constructor.
    """

    @property
    def skip_predicate(self) -> bool:
        """
        Determines whether this mutation should be skipped.

        :return bool:
            - `True`  → skip `apply_on_image`
            - `False` → apply the mutation
        """
        return False

    @safe
    def __call__(self, image: IntensityImage) -> IntensityImage:
        """
        Callable interface used by pipelines (e.g. `flow(...)` from
        the `returns` library).

        If `skip_predicate` is `True`, the input `IntensityImage` is returned
        unchanged. Otherwise, `apply_on_image` is executed. Exceptions are
        returned as a `Failure`.

        :param image:
            The `IntensityImage` to be modified.
        :return IntensityImage:
            The resulting image, wrapped in a `Result` container.
        """
        if self.skip_predicate:
            return image
        return self.apply_on_image(image)

    @abstractmethod
    def apply_on_image(self, image: IntensityImage) -> IntensityImage:
        """
        Applies the mutation to the given `IntensityImage`.

        This method must be implemented by concrete mutations and is
        called internally by `__call__` to support pipeline composition.

        :param image:
            The input `IntensityImage` to be modified.
        :return IntensityImage:
            A new or modified `IntensityImage`.
        """
