"""
heuristic_optimizer
===================

Population-based global minimization: genetic algorithms, particle swarms and the
tooling to compare stochastic runs.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed package version or '0.0.0' when unavailable."""
    try:
        return version("heuristic_optimizer")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
