# coolblocks/actions.py
"""
Action kit: fixed mitigation catalog and plan totals
"""

from typing import Dict, List

import pandas as pd

from coolblocks import config
from coolblocks.models import MitigationAction, Plan, PlanSummary

SDG_NAMES = {
    7: 'Clean Energy',
    12: 'Responsible Consumption',
    13: 'Climate Action',
}

ACTIONS = [
    MitigationAction('trees', 'Plant shade trees (2–3)', heat_drop=10, co2_saved_kg=25, sdg_tags=(13, 12)),
    MitigationAction('coolroof', 'Cool roof coating', heat_drop=8, co2_saved_kg=150, sdg_tags=(13, 7)),
    MitigationAction('shade', 'Shade structure / awnings', heat_drop=6, co2_saved_kg=40, sdg_tags=(13, 12)),
    MitigationAction('leds', 'Swap 10 bulbs to LED', heat_drop=2, co2_saved_kg=140, sdg_tags=(7, 13)),
    MitigationAction('thermostat', 'Smart thermostat schedule', heat_drop=2, co2_saved_kg=72, sdg_tags=(7, 13)),
]

_BY_ID: Dict[str, MitigationAction] = {a.id: a for a in ACTIONS}


def get_action(action_id: str) -> MitigationAction:
    """Catalog entry by id; KeyError for unknown ids"""
    return _BY_ID[action_id]


def ranked_actions(actions: List[MitigationAction] = None) -> List[MitigationAction]:
    """Biggest heat drop first, then biggest CO2 saving; stable otherwise"""
    actions = ACTIONS if actions is None else actions
    return sorted(actions, key=lambda a: (-a.heat_drop, -a.co2_saved_kg))


def summarize_plan(plan: Plan) -> PlanSummary:
    total_heat = sum(a.heat_drop for a in plan)
    total_co2 = sum(a.co2_saved_kg for a in plan)
    return PlanSummary(
        total_heat_drop=total_heat,
        total_co2_kg=float(total_co2),
        car_miles_equiv=total_co2 / config.CAR_KG_PER_MILE,
        action_count=len(plan),
    )


def sdg_caption(action: MitigationAction) -> str:
    return ', '.join(str(tag) for tag in action.sdg_tags)


def plan_to_dataframe(plan: Plan) -> pd.DataFrame:
    """One row per plan entry, in the order added"""
    rows = [
        {
            'step': i + 1,
            'action': a.label,
            'heat_drop': a.heat_drop,
            'co2_saved_kg': a.co2_saved_kg,
            'sdgs': sdg_caption(a),
        }
        for i, a in enumerate(plan)
    ]
    return pd.DataFrame(rows, columns=['step', 'action', 'heat_drop', 'co2_saved_kg', 'sdgs'])
