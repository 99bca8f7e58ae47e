"""Concurrent stress harness for employee repositories."""
from staffstore_lite.profiling.stress import (
    StressResult,
    format_stress_report,
    run_stress,
    verify,
)

__all__ = [
    "StressResult",
    "format_stress_report",
    "run_stress",
    "verify",
]
