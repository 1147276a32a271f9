"""
PySATL CloudStats
=================

Parametric distributions fitted to point cloud scalar values: parameter
estimation with an explicit validity state, probability queries, and Chi2
distance computation used to classify and filter point populations.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .cloud import *
from .cloud import __all__ as _cloud_all
from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .exceptions import *
from .exceptions import __all__ as _exc_all
from .families import *
from .families import __all__ as _family_all
from .stats import *
from .stats import __all__ as _stats_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-cloudstats")
__all__ = [
    "__version__",
    *_cloud_all,
    *_config_all,
    *_distr_all,
    *_exc_all,
    *_family_all,
    *_stats_all,
    *_types_all,
]

del _cloud_all
del _config_all
del _distr_all
del _exc_all
del _family_all
del _stats_all
del _types_all
