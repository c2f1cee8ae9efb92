"""Rapid Scaffold -- create a frontend project from a multi-design-system template.

Quick usage::

    import asyncio
    from rapid_scaffold import Pipeline, ScaffoldConfig

    outcome = asyncio.run(Pipeline(ScaffoldConfig()).run("my-app", "antd"))
    print(outcome.success, outcome.warnings)
"""

from rapid_scaffold.config import ExistingDestPolicy, ScaffoldConfig
from rapid_scaffold.errors import (
    BootstrapError,
    DestinationConflictError,
    FetchError,
    InvalidInputError,
    RelocationError,
    ScaffoldError,
    SoftMissingWarning,
)
from rapid_scaffold.pipeline import Pipeline, RunOutcome

__version__ = "0.1.0"

__all__ = [
    "BootstrapError",
    "DestinationConflictError",
    "ExistingDestPolicy",
    "FetchError",
    "InvalidInputError",
    "Pipeline",
    "RelocationError",
    "RunOutcome",
    "ScaffoldConfig",
    "ScaffoldError",
    "SoftMissingWarning",
]
