"""Background normalization settings and configuration."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Self

from loguru import logger
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackgroundSettings(BaseSettings):
    """
    Default parameters of the background fit and the normalization.

    Settings can be configured via:

    1. Environment variables (e.g., BACKGROUND_MAX_DEGREE=3)
    2. .env file in the working directory
    3. Default values defined below

    All settings use the BACKGROUND_ prefix for environment variables.

    .. rubric:: Examples

    Fit a cubic background on every other pixel::

        export BACKGROUND_MAX_DEGREE=3
        export BACKGROUND_SAMPLING_STEP=2
    """

    # Fit Configuration
    max_degree: Annotated[
        int,
        Field(
            default=2,
            description="Maximal total degree of the background polynomial",
            ge=0,
        ),
    ]
    sampling_step: Annotated[
        int,
        Field(
            default=4,
            description="Stride used to sample the background mask",
            ge=1,
        ),
    ]

    # Normalization Configuration
    lower: Annotated[
        float,
        Field(default=0.0, description="Image/background ratio mapped to 0"),
    ]
    upper: Annotated[
        float,
        Field(default=1.0, description="Image/background ratio mapped to 255"),
    ]

    model_config = SettingsConfigDict(
        env_prefix="BACKGROUND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        validate_assignment=True,
        extra="forbid",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> Self:
        if self.upper == self.lower:
            raise ValueError(
                f"Normalization bounds must differ, got lower={self.lower} and upper={self.upper}"
            )
        return self

    def log_config(self) -> None:
        """Log the active background normalization configuration."""
        logger.info("Background normalization - Configuration:")
        logger.info(f"  Polynomial degree: {self.max_degree}")
        logger.info(f"  Sampling step: {self.sampling_step}")
        logger.info(f"  Ratio bounds: [{self.lower}, {self.upper}]")


@lru_cache
def get_settings() -> BackgroundSettings:
    """
    Get cached settings instance.

    :return: The background normalization settings.
    """
    return BackgroundSettings()  # type: ignore
