from background.data_types import (
    Basis,
    BackgroundEstimate,
    BackgroundModel,
    Monomial,
    MonomialTables,
    SampleSet,
)
from background.fit import estimate_background, evaluate_background, fit_background

__all__ = (
    "Basis",
    "BackgroundEstimate",
    "BackgroundModel",
    "Monomial",
    "MonomialTables",
    "SampleSet",
    "estimate_background",
    "evaluate_background",
    "fit_background",
)
