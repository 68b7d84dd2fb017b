"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    MizzleError
    ├── PipelineError        (pipeline.py)
    │   └── InvalidChainUse
    ├── ValidationError      (pipeline.py)
    └── ConfigError          (mizzle_pipeline.config.validation)
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError
"""

from mizzle_pipeline.kernel.errors.base import MizzleError
from mizzle_pipeline.kernel.errors.pipeline import (
    InvalidChainUse,
    PipelineError,
    ValidationError,
)

__all__ = [
    "InvalidChainUse",
    "MizzleError",
    "PipelineError",
    "ValidationError",
]
