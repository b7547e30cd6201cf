import logging

import streamlit as st
from streamlit_folium import st_folium

from coolblocks import config
from coolblocks.actions import SDG_NAMES, plan_to_dataframe, ranked_actions, sdg_caption, summarize_plan
from coolblocks.greenspace import reference_circle
from coolblocks.lookup import LookupOrchestrator
from coolblocks.risk import RISK_COLORS
from coolblocks.state import AppState
from coolblocks.visualization import HeatRiskMapVisualizer, PlotlyVisualizer, format_number

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="CoolBlocks",
    page_icon="🌆",
    layout="wide"
)

SEARCH_PLACEHOLDER = "e.g., 21201, US or London or 10115, DE"


@st.cache_resource
def get_orchestrator():
    """One set of HTTP clients per server process"""
    return LookupOrchestrator()


def get_state() -> AppState:
    if 'app_state' not in st.session_state:
        st.session_state.app_state = AppState()
    return st.session_state.app_state


def render_header():
    st.title("🌆 CoolBlocks")
    st.markdown(
        "Global heat-island insights with an action kit. Enter any ZIP/City → we geocode, fetch weather, "
        "estimate local greenspace, and compute a heat-risk score with climate actions."
    )


def render_search(state: AppState):
    with st.form('search'):
        query = st.text_input("Enter ZIP/City (worldwide)", placeholder=SEARCH_PLACEHOLDER)
        submitted = st.form_submit_button(
            "Searching…" if state.is_searching else "Get Heat Risk",
            disabled=state.is_searching,
        )
    st.caption("Uses Open-Meteo + OpenStreetMap (no keys).")

    if submitted and query.strip() and not state.is_searching:
        state.begin_lookup()
        st.session_state.pending_query = query
        st.rerun()

    # Second pass: the button is now rendered disabled while the lookup runs
    if state.is_searching:
        query = st.session_state.pop('pending_query', '')
        with st.spinner("Searching…"):
            state.run_lookup(query, get_orchestrator())
        st.rerun()

    if state.error:
        st.error(state.error)


def render_score_card(state: AppState):
    outcome = state.outcome
    if outcome is None:
        return
    weather = outcome.weather
    assessment = outcome.assessment
    color = RISK_COLORS[assessment.label]

    with st.container(border=True):
        left, right = st.columns([2, 1])
        left.caption("Location")
        left.subheader(outcome.location.display_name)
        right.caption("Heat Risk Score")
        right.markdown(
            f"<div style='font-size:2rem;font-weight:800;color:{color}'>{assessment.score} / 100</div>"
            f"<b>{assessment.label.value}</b>",
            unsafe_allow_html=True,
        )

        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Air temperature", f"{format_number(weather.temperature_c, 1)} °C")
        humidity = weather.relative_humidity_pct
        c2.metric("Relative humidity", f"{format_number(humidity, 0)}%" if humidity is not None else "n/a")
        c3.metric(
            "Heat index",
            f"{format_number(assessment.heat_index_c, 1)} °C",
            help=(f"Open-Meteo apparent temperature: {format_number(weather.apparent_temperature_c, 1)} °C"
                  if weather.apparent_temperature_c is not None else None),
        )
        c4.metric("Greenspace (proxy)", f"{format_number(assessment.greenspace_pct, 0)}%")

        if outcome.greenspace.is_fallback:
            st.caption(f"Greenspace unavailable, using the {config.DEFAULT_GREENSPACE_PCT:.0f}% default.")
        st.caption("Demo estimates; Overpass may be slow sometimes.")


def render_map(state: AppState):
    outcome = state.outcome
    if outcome is None:
        return
    loc = outcome.location
    circle = reference_circle(loc.latitude, loc.longitude)
    folium_map = HeatRiskMapVisualizer().create_outcome_map(outcome, circle=circle)
    st_folium(folium_map, height=config.MAP_HEIGHT, use_container_width=True, returned_objects=[])
    st.caption("Marker tinted by risk (green→amber→red).")


def render_action_kit(state: AppState):
    with st.container(border=True):
        st.subheader("Action Kit")
        st.markdown("Add steps to reduce outdoor heat & indoor cooling demand.")
        cols = st.columns(2)
        for i, action in enumerate(ranked_actions()):
            with cols[i % 2].container(border=True):
                st.markdown(f"**{action.label}**")
                st.caption(f"Heat ↓ ~{action.heat_drop} • CO₂ ↓ ~{format_number(action.co2_saved_kg)}")
                st.caption(f"SDGs: {sdg_caption(action)}")
                if st.button("Add", key=f"add_{action.id}"):
                    state.add_action(action)
                    logger.info(f"Added {action.id} to plan ({len(state.plan)} actions)")


def render_dashboard(state: AppState):
    summary = summarize_plan(state.plan)
    with st.container(border=True):
        st.subheader("Community Impact")
        c1, c2, c3 = st.columns(3)
        c1.metric("Heat score reduction", summary.total_heat_drop)
        c2.metric("CO₂ avoided (yr)", format_number(summary.total_co2_kg))
        c3.metric("Car miles equiv", format_number(summary.car_miles_equiv))

        st.markdown("**Your Plan**")
        if len(state.plan) == 0:
            st.markdown("No actions added yet.")
        else:
            st.markdown("\n".join(
                f"- {a.label} — heat ↓ {a.heat_drop}, CO₂ ↓ {format_number(a.co2_saved_kg)} kg/yr"
                for a in state.plan
            ))
            plan_df = plan_to_dataframe(state.plan)
            st.plotly_chart(PlotlyVisualizer.create_plan_impact_chart(plan_df), use_container_width=True)

        sdgs = ", ".join(f"{k} ({v})" for k, v in sorted(SDG_NAMES.items(), reverse=True))
        st.caption(f"SDGs: {sdgs}.")


def main():
    state = get_state()
    render_header()
    render_search(state)

    col1, col2 = st.columns(2)
    with col1:
        render_score_card(state)
        render_action_kit(state)
    with col2:
        render_map(state)
        render_dashboard(state)

    st.markdown("---")
    st.caption("CoolBlocks • Heat-Island Action Kit")


if __name__ == "__main__":
    main()
