import pytest

from microinvest.config import load_scenario
from microinvest.engine.projection import project
from microinvest.plans import (
    DEFAULT_PLAN_ID,
    InvestmentPlan,
    PlanBook,
    invest_now,
    plan_from_config,
    projection_input,
)
from microinvest.utils.validation import InvalidArgument


def test_spare_change_feeds_starting_balance(demo_plan: InvestmentPlan) -> None:
    inputs = projection_input(demo_plan, starting_balance=100, risk_tolerance="aggressive")
    assert inputs.starting_balance == pytest.approx(109.3)
    assert inputs.monthly_contribution == 0
    assert inputs.risk_tolerance == "aggressive"
    assert project(inputs).final_value > 109.3


def test_projection_input_needs_something_to_invest() -> None:
    plan = InvestmentPlan(id=DEFAULT_PLAN_ID, name="Empty")
    with pytest.raises(InvalidArgument, match="at least one"):
        projection_input(plan)
    with pytest.raises(InvalidArgument):
        projection_input(plan, starting_balance=-1)


def test_invest_now_moves_spare_change(demo_plan: InvestmentPlan) -> None:
    demo_plan.monthly_contribution = 200
    moved = invest_now(demo_plan)
    assert moved == pytest.approx(9.3)
    assert demo_plan.monthly_contribution == pytest.approx(209.3)
    assert len(demo_plan.ledger) == 0
    with pytest.raises(InvalidArgument, match="No spare change"):
        invest_now(demo_plan)


def test_plan_book_lifecycle() -> None:
    book = PlanBook()
    assert book.current.id == DEFAULT_PLAN_ID
    assert book.current.name == "Default Plan"

    vacation = book.create("  Vacation Fund ", goal_amount=50000, goal_years=2)
    assert book.current is vacation
    assert vacation.name == "Vacation Fund"
    assert vacation.years == 2
    assert len(book) == 2

    book.select(DEFAULT_PLAN_ID)
    assert book.current.id == DEFAULT_PLAN_ID
    book.select(vacation.id)
    book.delete(vacation.id)
    assert vacation.id not in book
    assert book.current.id == DEFAULT_PLAN_ID


def test_plans_have_independent_ledgers() -> None:
    book = PlanBook()
    first = book.create("First")
    second = book.create("Second")
    assert first.id != second.id
    first.ledger.record("Coffee", 149.5, 10)
    assert len(second.ledger) == 0
    assert len(book.get(DEFAULT_PLAN_ID).ledger) == 0


def test_default_plan_is_protected() -> None:
    book = PlanBook()
    with pytest.raises(InvalidArgument, match="Cannot delete default plan"):
        book.delete(DEFAULT_PLAN_ID)
    with pytest.raises(InvalidArgument):
        book.select("missing")
    with pytest.raises(InvalidArgument):
        PlanBook(InvestmentPlan(id="other", name="Other"))


@pytest.mark.parametrize(
    "name, goal_amount, goal_years",
    [("", None, None), ("   ", None, None), ("Car", -10, None), ("Car", None, 0), ("Car", None, 51)],
)
def test_create_rejects_bad_input(name: str, goal_amount, goal_years) -> None:
    with pytest.raises(InvalidArgument):
        PlanBook().create(name, goal_amount, goal_years)


def test_plan_from_demo_config(config_dir) -> None:
    plan = plan_from_config(load_scenario("demo", config_dir))
    assert plan.id == DEFAULT_PLAN_ID
    assert plan.name == "demo"
    assert plan.spare_change == pytest.approx(9.3)
    assert plan.monthly_contribution == 200
    assert plan.goal_amount == 25000
    inputs = projection_input(plan, starting_balance=1000)
    assert inputs.starting_balance == pytest.approx(1009.3)
