from pathlib import Path

import pytest

from microinvest.plans import InvestmentPlan

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


@pytest.fixture
def config_dir() -> Path:
    return CONFIG_DIR


@pytest.fixture
def demo_plan() -> InvestmentPlan:
    plan = InvestmentPlan(id="default", name="Default Plan")
    plan.ledger.seed_demo(10)
    return plan
