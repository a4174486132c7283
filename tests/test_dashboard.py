import pytest

from microinvest.config import Config, load_scenario
from microinvest.dashboard import initial_book, projection_chart_frame
from microinvest.engine.projection import ProjectionInput, project


def test_chart_frame_is_indexed_by_month() -> None:
    series = project(ProjectionInput(0, 100, 10, 12, "moderate"))
    df = projection_chart_frame(series, goal_amount=20000)
    assert list(df.columns) == ["Conservative", "Projected", "Aggressive", "Goal"]
    assert df.index.name == "month"
    assert list(df.index) == [12 * k for k in range(1, 13)]
    assert (df["Goal"] == 20000).all()
    assert df["Projected"].iloc[-1] == pytest.approx(series.final_value)


def test_chart_frame_without_goal() -> None:
    df = projection_chart_frame(project(ProjectionInput(100, 0, 5, 1)))
    assert "Goal" not in df.columns


def test_initial_book_uses_scenario(config_dir) -> None:
    book = initial_book(load_scenario("demo", config_dir))
    assert book.current.id == "default"
    assert book.current.spare_change == pytest.approx(9.3)
    assert initial_book(Config()).current.name == "Default Plan"
