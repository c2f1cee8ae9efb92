"""Rapid Scaffold engine -- transplants one design-system variant of a template.

Quick usage::

    from rapid_scaffold.scaffolder import ScaffoldEngine

    engine = ScaffoldEngine()
    report = await engine.scaffold("/tmp/staged-template", "antd", "/work/my-app")
    for warning in report.warnings:
        print(warning)
"""

from rapid_scaffold.scaffolder.engine import ScaffoldEngine, ScaffoldReport
from rapid_scaffold.scaffolder.policy import check_destination, prepare_destination
from rapid_scaffold.scaffolder.rules import (
    RELOCATION_RULES,
    VARIANTS,
    RelocationRule,
    Variant,
    get_variant,
    variant_names,
)

__all__ = [
    "RELOCATION_RULES",
    "VARIANTS",
    "RelocationRule",
    "ScaffoldEngine",
    "ScaffoldReport",
    "Variant",
    "check_destination",
    "get_variant",
    "prepare_destination",
    "variant_names",
]
