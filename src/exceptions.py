class ImageShapeMismatchError(Exception):
    """Raised when grids that take part in one operation differ in shape."""

    def __init__(self, message: str):
        super().__init__(message)


class UnsupportedArityError(Exception):
    """Raised when an image has a shape or data type that cannot be normalized."""

    def __init__(self, message: str):
        super().__init__(message)


class BackgroundFitError(Exception):
    """Raised when a background polynomial cannot be fitted to the image."""

    def __init__(self, message: str):
        super().__init__(message)


class InsufficientSamplesError(BackgroundFitError):
    """Raised when the mask yields fewer samples than there are polynomial coefficients."""

    def __init__(self, sample_count: int, coefficient_count: int):
        self.sample_count = sample_count
        self.coefficient_count = coefficient_count
        super().__init__(
            f"Only {sample_count} background sample(s) selected, "
            f"but at least {coefficient_count} are needed to fit the polynomial"
        )
