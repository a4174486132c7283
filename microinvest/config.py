"""Configuration models and loaders for microinvest."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator

from microinvest.accounting.ledger import CATEGORIES, MAX_PURCHASE_AMOUNT

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"


class MetaParams(BaseModel):
    name: str = "default"
    description: str | None = None
    currency_symbol: str = "₹"


class RoundingParams(BaseModel):
    """Round-up settings applied to every purchase."""

    unit: float = Field(10.0, gt=0, description="Round purchases up to the next multiple of this unit")
    allowed_units: Tuple[float, ...] = Field((1.0, 5.0, 10.0), min_length=1)
    max_amount: float = Field(MAX_PURCHASE_AMOUNT, gt=0, description="Largest purchase accepted")


class ProjectionParams(BaseModel):
    """Inputs to the compound-growth projection."""

    starting_balance: float = Field(0.0, ge=0, description="Already-invested balance")
    monthly_contribution: float = Field(0.0, ge=0)
    annual_return_percent: float = Field(8.0, ge=0, le=50)
    years: float = Field(5.0, gt=0, le=50)
    risk_tolerance: Literal["conservative", "moderate", "aggressive"] = "moderate"


class GoalParams(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    years: Optional[float] = Field(None, gt=0, le=50)


class TransactionParams(BaseModel):
    """A purchase as written in a scenario file; the round-up is derived."""

    description: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    category: str = "Other"
    date: str = Field(default_factory=lambda: date.today().isoformat())

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        # unquoted YAML dates arrive as datetime.date
        return value.isoformat() if isinstance(value, date) else value

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        if value not in CATEGORIES:
            raise ValueError(f"Unknown category {value!r}")
        return value


class Config(BaseModel):
    """Top-level configuration model."""

    meta: MetaParams = Field(default_factory=MetaParams)
    rounding: RoundingParams = Field(default_factory=RoundingParams)
    projection: ProjectionParams = Field(default_factory=ProjectionParams)
    goal: GoalParams = Field(default_factory=GoalParams)
    transactions: List[TransactionParams] = Field(default_factory=list)


def _deep_update(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_update(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_dict() -> Dict[str, Any]:
    """Return the default configuration as a dictionary."""

    return Config().model_dump()


def load_config(path: str | Path | None = None, overrides: Optional[Dict[str, Any]] = None) -> Config:
    """Load configuration from YAML and merge with defaults."""

    base_dict = default_config_dict()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            user_data = yaml.safe_load(handle) or {}
        if not isinstance(user_data, dict):
            raise ValueError(f"Config YAML {path} must map to an object")
        base_dict = _deep_update(base_dict, user_data)
    if overrides:
        base_dict = _deep_update(base_dict, overrides)
    return Config.model_validate(base_dict)


def load_scenario(name: str, config_dir: str | Path | None = None) -> Config:
    """Load a scenario preset (``configs/<name>.yaml``) by name or path."""

    candidate = Path(name)
    if candidate.suffix in {".yaml", ".yml"} and candidate.exists():
        return load_config(candidate)
    directory = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
    path = directory / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Scenario {name!r} not found in {directory}")
    return load_config(path)


def available_scenarios(config_dir: str | Path | None = None) -> List[str]:
    directory = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
    if not directory.exists():
        return []
    return sorted(path.stem for path in directory.glob("*.yaml"))


__all__ = [
    "Config",
    "MetaParams",
    "RoundingParams",
    "ProjectionParams",
    "GoalParams",
    "TransactionParams",
    "default_config_dict",
    "load_config",
    "load_scenario",
    "available_scenarios",
]
