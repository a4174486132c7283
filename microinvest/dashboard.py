"""Streamlit dashboard for interactive micro-investing."""

from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd
import streamlit as st

from microinvest.accounting.ledger import CATEGORIES, QUICK_PURCHASES
from microinvest.analysis import category_breakdown, goal_progress
from microinvest.config import Config, available_scenarios, load_scenario
from microinvest.engine.projection import RISK_TOLERANCES, ProjectionSeries, project
from microinvest.plans import PlanBook, invest_now, plan_from_config, projection_input
from microinvest.portfolio import allocation_frame, risk_profile
from microinvest.reporting.export import transactions_to_csv
from microinvest.utils.logging import get_logger
from microinvest.utils.validation import InvalidArgument

SESSION_BOOK_KEY = "microinvest_plan_book"
SESSION_PROJECTION_KEY = "microinvest_projection"
ROUND_UNITS = (1.0, 5.0, 10.0)

logger = get_logger(__name__)


def projection_chart_frame(series: ProjectionSeries, goal_amount: Optional[float] = None) -> pd.DataFrame:
    """Frame indexed by elapsed month, ready for ``st.line_chart``."""

    df = pd.DataFrame(
        {
            "Conservative": list(series.conservative),
            "Projected": list(series.values),
            "Aggressive": list(series.aggressive),
        },
        index=pd.Index(list(series.months), name="month"),
    )
    if goal_amount:
        df["Goal"] = goal_amount
    return df


def initial_book(config: Config) -> PlanBook:
    return PlanBook(plan_from_config(config))


def _book() -> PlanBook:
    if SESSION_BOOK_KEY not in st.session_state:
        names = available_scenarios()
        cfg = load_scenario("base") if "base" in names else Config()
        st.session_state[SESSION_BOOK_KEY] = initial_book(cfg)
    return st.session_state[SESSION_BOOK_KEY]


def _plan_sidebar(book: PlanBook) -> None:
    st.sidebar.header("Investment plans")
    ids = [plan.id for plan in book.plans]
    names = {plan.id: plan.name for plan in book.plans}
    selected = st.sidebar.selectbox(
        "Plan", ids, index=ids.index(book.current_id), format_func=lambda pid: names[pid]
    )
    if selected != book.current_id:
        book.select(selected)
        st.session_state.pop(SESSION_PROJECTION_KEY, None)

    with st.sidebar.expander("New plan"):
        name = st.text_input("Plan name", placeholder="e.g., Vacation Fund")
        goal_amount = st.number_input("Goal amount (optional)", min_value=0.0, value=0.0, step=1000.0)
        goal_years = st.number_input("Goal years (optional)", min_value=0.0, max_value=50.0, value=0.0, step=1.0)
        if st.button("Create plan"):
            try:
                book.create(name, goal_amount or None, goal_years or None)
                st.session_state.pop(SESSION_PROJECTION_KEY, None)
                st.rerun()
            except InvalidArgument as exc:
                st.error(str(exc))

    if book.current_id != "default" and st.sidebar.button("Delete current plan"):
        book.delete(book.current_id)
        st.session_state.pop(SESSION_PROJECTION_KEY, None)
        st.rerun()


def _transaction_form(book: PlanBook) -> None:
    plan = book.current
    st.subheader("Add transaction")
    with st.form("transaction", clear_on_submit=True):
        desc = st.text_input("Description", placeholder="Coffee, Grocery...")
        category = st.selectbox("Category", CATEGORIES)
        amount = st.number_input("Amount", min_value=0.0, step=0.01, format="%.2f")
        when = st.date_input("Date", value=date.today())
        unit = st.selectbox("Round to", ROUND_UNITS, index=2, format_func=lambda u: f"{u:g}")
        submitted = st.form_submit_button("Add transaction")
    if submitted:
        try:
            txn = plan.ledger.record(desc, amount, unit, category=category, date=when)
            st.success(f"Transaction added - round-up {txn.round_up:.2f}")
        except InvalidArgument as exc:
            st.error(str(exc))

    st.caption("Quick add")
    quick = st.columns(len(QUICK_PURCHASES))
    for col, (name, (amount, _)) in zip(quick, QUICK_PURCHASES.items()):
        if col.button(f"{name} {amount:,.2f}"):
            txn = plan.ledger.add_quick(name, unit)
            st.success(f"{name} added - round-up {txn.round_up:.2f}")

    cols = st.columns(2)
    if cols[0].button("Seed demo"):
        plan.ledger.seed_demo(unit)
    if cols[1].button("Clear all"):
        plan.ledger.clear()
        st.session_state.pop(SESSION_PROJECTION_KEY, None)


def _ledger_view(book: PlanBook) -> None:
    plan = book.current
    st.subheader(f"Transactions ({len(plan.ledger)})")
    if not len(plan.ledger):
        st.info("No transactions yet")
        return
    st.dataframe(plan.ledger.to_frame(), hide_index=False, use_container_width=True)
    index = st.number_input("Row to delete", min_value=0, max_value=len(plan.ledger) - 1, value=0, step=1)
    if st.button("Delete row"):
        plan.ledger.remove(int(index))
        st.rerun()

    st.metric("Spare change", f"{plan.spare_change:,.2f}")
    cols = st.columns(2)
    if cols[0].button("Invest now"):
        try:
            moved = invest_now(plan)
            st.success(f"Moved {moved:,.2f} into the monthly contribution")
            st.rerun()
        except InvalidArgument as exc:
            st.error(str(exc))
    cols[1].download_button(
        "Export CSV",
        data=transactions_to_csv(plan.ledger).encode("utf-8"),
        file_name=f"{plan.name}_transactions.csv",
        mime="text/csv",
    )

    breakdown = category_breakdown(plan.ledger)
    st.subheader("Round-ups by category")
    st.bar_chart(breakdown.set_index("category")["round_up"], use_container_width=True)


def _settings(book: PlanBook) -> tuple[float, str]:
    plan = book.current
    st.subheader("Investment settings")
    balance = st.number_input("Current balance", min_value=0.0, value=0.0, step=100.0)
    plan.annual_return_percent = st.number_input(
        "Expected annual return (%)", min_value=0.0, max_value=50.0, value=float(plan.annual_return_percent), step=0.5
    )
    plan.monthly_contribution = st.number_input(
        "Monthly contribution", min_value=0.0, value=float(plan.monthly_contribution), step=100.0
    )
    plan.years = st.number_input(
        "Investment duration (years)", min_value=0.1, max_value=50.0, value=float(plan.years), step=0.1
    )
    risk = st.radio(
        "Risk tolerance",
        RISK_TOLERANCES,
        index=RISK_TOLERANCES.index("moderate"),
        format_func=lambda key: risk_profile(key).label,
        horizontal=True,
    )
    profile = risk_profile(risk)
    st.caption(f"{profile.description} - {profile.return_range}. {profile.summary}")
    st.dataframe(allocation_frame(risk), hide_index=True, use_container_width=True)
    return balance, risk


def _projection(book: PlanBook, balance: float, risk: str) -> None:
    plan = book.current
    if st.button("Simulate", type="primary"):
        try:
            st.session_state[SESSION_PROJECTION_KEY] = project(projection_input(plan, balance, risk))
            logger.info("Projection generated for %s risk profile", risk)
        except InvalidArgument as exc:
            st.error(str(exc))
    series: Optional[ProjectionSeries] = st.session_state.get(SESSION_PROJECTION_KEY)
    if series is None:
        return
    st.subheader("Projection")
    st.line_chart(projection_chart_frame(series, plan.goal_amount), use_container_width=True)
    st.markdown(
        f"**Projected after {plan.years:g} years: {series.final_value:,.2f}** "
        f"(assumed {plan.annual_return_percent:g}% p.a.)"
    )
    st.markdown(
        f"Risk-adjusted range ({risk}): conservative {series.final_conservative:,.2f}, "
        f"aggressive {series.final_aggressive:,.2f}"
    )
    status = goal_progress(plan.goal_amount, balance + plan.spare_change, series.final_value)
    if status is not None:
        st.subheader("Goal progress")
        st.progress(status.progress_pct / 100, text=f"{status.progress_pct:.1f}% of goal reached")
        if status.on_track:
            st.success("On track to meet goal!")
        else:
            st.warning(f"{status.shortfall:,.0f} short of goal")


def main() -> None:
    st.set_page_config(page_title="Micro-Invest", layout="wide")
    st.title("Micro-Invest")
    st.markdown("Collect spare change from everyday transactions and watch it compound.")

    book = _book()
    _plan_sidebar(book)
    left, right = st.columns(2)
    with left:
        _transaction_form(book)
        _ledger_view(book)
    with right:
        balance, risk = _settings(book)
        _projection(book, balance, risk)


if __name__ == "__main__":
    main()
