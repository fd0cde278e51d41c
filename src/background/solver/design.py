import numpy as np
from numpy.typing import NDArray

from background.data_types import MonomialTables, SampleSet


def build_design_matrix(tables: MonomialTables, samples: SampleSet) -> NDArray[np.float64]:
    """
    Constructs the Least Squares design matrix for the selected samples.

    Row ``r`` holds the value of every monomial at sample ``r``, looked up from the
    pre-computed coordinate tables.
    """
    return tables.x[samples.xs] * tables.y[samples.ys]
