"""Input/output helpers for microinvest."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import yaml

from microinvest.config import Config


def ensure_directory(path: Path) -> None:
    """Create directory if it does not exist."""

    path.mkdir(parents=True, exist_ok=True)


def safe_filename(name: str) -> str:
    """Reduce ``name`` to characters safe for a file name."""

    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", name.strip())
    return cleaned.strip("_") or "plan"


def timestamped_dir(base: Path, prefix: str) -> Path:
    """Return a directory path suffixed with the current timestamp."""

    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = base / safe_filename(prefix) / stamp
    ensure_directory(path)
    return path


def save_table(df: pd.DataFrame, out_dir: Path, name: str) -> Path:
    """Persist a dataframe as CSV and return its path."""

    ensure_directory(out_dir)
    path = out_dir / f"{name}.csv"
    df.to_csv(path, index=False)
    return path


def write_config_snapshot(config: Config, out_dir: Path, filename: str = "config_snapshot.yaml") -> Path:
    """Persist configuration as YAML for reproducibility."""

    ensure_directory(out_dir)
    path = out_dir / filename
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.model_dump(mode="json"), handle, sort_keys=False, allow_unicode=True)
    return path


__all__ = [
    "ensure_directory",
    "safe_filename",
    "timestamped_dir",
    "save_table",
    "write_config_snapshot",
]
