"""Investment plans and the caller-owned plan book."""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from microinvest.accounting.ledger import SpareChangeLedger, make_transaction
from microinvest.config import Config
from microinvest.engine.projection import ProjectionInput, RiskTolerance
from microinvest.utils.money import round_currency
from microinvest.utils.validation import InvalidArgument

logger = logging.getLogger(__name__)

DEFAULT_PLAN_ID = "default"
DEFAULT_PLAN_NAME = "Default Plan"
DEFAULT_ANNUAL_RETURN = 8.0
DEFAULT_YEARS = 5.0

_id_counter = itertools.count()


def _new_plan_id() -> str:
    return f"{int(time.time() * 1000)}-{next(_id_counter)}"


@dataclass
class InvestmentPlan:
    id: str
    name: str
    ledger: SpareChangeLedger = field(default_factory=SpareChangeLedger)
    monthly_contribution: float = 0.0
    annual_return_percent: float = DEFAULT_ANNUAL_RETURN
    years: float = DEFAULT_YEARS
    goal_amount: Optional[float] = None
    goal_years: Optional[float] = None

    @property
    def spare_change(self) -> float:
        return self.ledger.total_spare()


def invest_now(plan: InvestmentPlan) -> float:
    """Fold the plan's spare change into its monthly contribution.

    Returns the amount moved. The ledger is emptied afterwards.
    """

    spare = plan.spare_change
    if spare <= 0:
        raise InvalidArgument("No spare change to invest")
    plan.monthly_contribution = round_currency(plan.monthly_contribution + spare)
    plan.ledger.clear()
    logger.info("Moved %.2f spare change into the monthly contribution of %s", spare, plan.name)
    return spare


def projection_input(
    plan: InvestmentPlan,
    starting_balance: float = 0.0,
    risk_tolerance: RiskTolerance = "moderate",
) -> ProjectionInput:
    """Build engine inputs; accumulated spare change is added to the start."""

    if starting_balance < 0:
        raise InvalidArgument("starting_balance must be non-negative")
    if plan.spare_change + plan.monthly_contribution + starting_balance <= 0:
        raise InvalidArgument(
            "You need at least one of: spare change, monthly contribution, or current balance"
        )
    return ProjectionInput(
        starting_balance=round_currency(plan.spare_change + starting_balance),
        monthly_contribution=plan.monthly_contribution,
        annual_return_percent=plan.annual_return_percent,
        duration_years=plan.years,
        risk_tolerance=risk_tolerance,
    )


def plan_from_config(config: Config, plan_id: str = DEFAULT_PLAN_ID) -> InvestmentPlan:
    """Materialise the plan described by a scenario config."""

    ledger = SpareChangeLedger()
    for txn in config.transactions:
        ledger.add(
            make_transaction(
                txn.description,
                txn.amount,
                config.rounding.unit,
                category=txn.category,
                date=txn.date,
                max_amount=config.rounding.max_amount,
            )
        )
    goal = config.goal
    name = config.meta.name if config.meta.name != "default" else DEFAULT_PLAN_NAME
    return InvestmentPlan(
        id=plan_id,
        name=name,
        ledger=ledger,
        monthly_contribution=config.projection.monthly_contribution,
        annual_return_percent=config.projection.annual_return_percent,
        years=config.projection.years,
        goal_amount=goal.amount,
        goal_years=goal.years,
    )


class PlanBook:
    """Set of plans plus the current selection.

    A plan with id ``default`` always exists and cannot be deleted.
    """

    def __init__(self, default_plan: Optional[InvestmentPlan] = None) -> None:
        plan = default_plan or InvestmentPlan(id=DEFAULT_PLAN_ID, name=DEFAULT_PLAN_NAME)
        if plan.id != DEFAULT_PLAN_ID:
            raise InvalidArgument(f"The default plan must use id {DEFAULT_PLAN_ID!r}")
        self._plans: Dict[str, InvestmentPlan] = {plan.id: plan}
        self.current_id = plan.id

    def __len__(self) -> int:
        return len(self._plans)

    def __contains__(self, plan_id: object) -> bool:
        return plan_id in self._plans

    @property
    def plans(self) -> List[InvestmentPlan]:
        return list(self._plans.values())

    @property
    def current(self) -> InvestmentPlan:
        return self._plans.get(self.current_id, self._plans[DEFAULT_PLAN_ID])

    def get(self, plan_id: str) -> InvestmentPlan:
        try:
            return self._plans[plan_id]
        except KeyError as exc:
            raise InvalidArgument(f"Unknown plan {plan_id!r}") from exc

    def select(self, plan_id: str) -> InvestmentPlan:
        plan = self.get(plan_id)
        self.current_id = plan.id
        return plan

    def create(
        self,
        name: str,
        goal_amount: Optional[float] = None,
        goal_years: Optional[float] = None,
    ) -> InvestmentPlan:
        """Add a plan and make it current; a goal horizon becomes the plan duration."""

        clean = (name or "").strip()
        if not clean:
            raise InvalidArgument("Plan name is required")
        if goal_amount is not None and goal_amount <= 0:
            raise InvalidArgument("goal_amount must be positive")
        if goal_years is not None and not 0 < goal_years <= 50:
            raise InvalidArgument("goal_years must lie in (0, 50]")
        plan = InvestmentPlan(
            id=_new_plan_id(),
            name=clean,
            years=goal_years if goal_years else DEFAULT_YEARS,
            goal_amount=goal_amount,
            goal_years=goal_years,
        )
        self._plans[plan.id] = plan
        self.current_id = plan.id
        logger.info("Created plan %r", clean)
        return plan

    def delete(self, plan_id: str) -> InvestmentPlan:
        if plan_id == DEFAULT_PLAN_ID:
            raise InvalidArgument("Cannot delete default plan")
        plan = self.get(plan_id)
        del self._plans[plan_id]
        if self.current_id == plan_id:
            self.current_id = DEFAULT_PLAN_ID
        logger.info("Deleted plan %r", plan.name)
        return plan


__all__ = [
    "DEFAULT_PLAN_ID",
    "InvestmentPlan",
    "PlanBook",
    "invest_now",
    "projection_input",
    "plan_from_config",
]
