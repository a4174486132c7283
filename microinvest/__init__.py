"""Spare-change micro-investing toolkit."""

from importlib import metadata

from microinvest.engine.projection import ProjectionInput, ProjectionSeries, project
from microinvest.engine.roundup import round_up
from microinvest.utils.validation import InvalidArgument


def get_version() -> str:
    """Return the installed package version."""
    try:
        return metadata.version("microinvest")
    except metadata.PackageNotFoundError:  # pragma: no cover - fallback for local usage
        return "0.1.0"


__all__ = ["InvalidArgument", "ProjectionInput", "ProjectionSeries", "get_version", "project", "round_up"]
