"""
Distributions subpackage

Contract and building blocks of the distributions used to classify point
cloud scalar values:

- distribution contract and validity state (:mod:`.distribution`);
- scalar value sources (:mod:`.sources`);
- Chi2 binning (:mod:`.chi2`);
- result objects (:mod:`.results`);
- numerical fallbacks (:mod:`.numeric`);
- supports (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .chi2 import compute_chi2, equal_probability_boundaries
from .distribution import GenericDistribution
from .results import CHI2_FAILURE, Chi2Result, FitResult
from .sources import ScalarFieldSource, ScalarValueSource, SequenceSource, as_array
from .support import ContinuousSupport, Support

__all__ = [
    # contract
    "GenericDistribution",
    # results
    "CHI2_FAILURE",
    "Chi2Result",
    "FitResult",
    # sources
    "ScalarValueSource",
    "ScalarFieldSource",
    "SequenceSource",
    "as_array",
    # chi2
    "compute_chi2",
    "equal_probability_boundaries",
    # support
    "ContinuousSupport",
    "Support",
]
