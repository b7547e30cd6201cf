"""
test_actions.py: action catalog ordering and plan totals.

Run:
    pytest tests/test_actions.py -v
"""

import pytest

from coolblocks.actions import ACTIONS, get_action, plan_to_dataframe, ranked_actions, sdg_caption, summarize_plan
from coolblocks.models import MitigationAction, Plan
from coolblocks.state import AppState


class TestCatalog:

    def test_ranked_by_heat_then_co2(self):
        assert [a.id for a in ranked_actions()] == ["trees", "coolroof", "shade", "leds", "thermostat"]

    def test_ranking_is_stable_for_full_ties(self):
        a = MitigationAction("a", "A", heat_drop=3, co2_saved_kg=10)
        b = MitigationAction("b", "B", heat_drop=3, co2_saved_kg=10)
        c = MitigationAction("c", "C", heat_drop=5, co2_saved_kg=1)
        assert [x.id for x in ranked_actions([a, b, c])] == ["c", "a", "b"]

    def test_catalog_untouched_by_ranking(self):
        before = list(ACTIONS)
        ranked_actions()
        assert ACTIONS == before

    def test_get_action(self):
        trees = get_action("trees")
        assert (trees.heat_drop, trees.co2_saved_kg) == (10, 25)
        assert trees.sdg_tags == (13, 12)
        with pytest.raises(KeyError):
            get_action("solar")

    def test_sdg_caption(self):
        assert sdg_caption(get_action("coolroof")) == "13, 7"
        assert sdg_caption(get_action("leds")) == "7, 13"


class TestPlan:

    def test_empty_plan_totals(self):
        summary = summarize_plan(Plan())
        assert summary.total_heat_drop == 0
        assert summary.total_co2_kg == 0
        assert summary.car_miles_equiv == 0
        assert summary.action_count == 0

    def test_trees_then_coolroof(self):
        plan = Plan().add(get_action("trees")).add(get_action("coolroof"))
        summary = summarize_plan(plan)
        assert summary.total_heat_drop == 18
        assert summary.total_co2_kg == 175
        assert summary.car_miles_equiv == pytest.approx(175 / 0.404)
        assert round(summary.car_miles_equiv, 1) == 433.2

    def test_duplicates_kept_in_order(self):
        state = AppState()
        for action_id in ("shade", "trees", "shade"):
            state.add_action(get_action(action_id))
        assert [a.id for a in state.plan] == ["shade", "trees", "shade"]
        assert summarize_plan(state.plan).total_heat_drop == 22

    def test_add_returns_new_plan(self):
        empty = Plan()
        one = empty.add(get_action("leds"))
        assert len(empty) == 0
        assert len(one) == 1

    def test_summary_to_dict(self):
        summary = summarize_plan(Plan().add(get_action("trees")).add(get_action("coolroof")))
        assert summary.to_dict() == {
            "total_heat_drop": 18,
            "total_co2_kg": 175.0,
            "car_miles_equiv": 433.2,
            "action_count": 2,
        }

    def test_plan_dataframe(self):
        df = plan_to_dataframe(Plan().add(get_action("leds")).add(get_action("leds")))
        assert list(df.columns) == ["step", "action", "heat_drop", "co2_saved_kg", "sdgs"]
        assert df["step"].tolist() == [1, 2]
        assert df["co2_saved_kg"].sum() == 280

    def test_empty_plan_dataframe(self):
        assert plan_to_dataframe(Plan()).empty
