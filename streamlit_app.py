# streamlit_app.py
# ------------------------------------------------------------
# Streamlit UI for the submersible causeway design tool.
# - Collects inputs (or starts from a design template)
# - Calls DesignService.calculate() and the decision-support calculators
# - Shows structural results, optimisation advice, cost, environment, health
# - Saves designs as sessions and compares two of them
# - Optional: length sweep of the safety margin
#
# Run:
#   streamlit run streamlit_app.py
#
from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np
import pandas as pd
import streamlit as st

# Local imports (no circular refs; causeway/* never imports streamlit_app)
from causeway.config import CausewayConfig
from causeway.errors import CausewayError
from causeway.models import DesignInput, SoilType
from causeway.service import DesignService
from causeway.templates import get_template, template_names
from charts.plots import plot_cost_breakdown, plot_health_scores, plot_margin_sweep
from export.excel import build_comparison_table, build_cost_table, build_results_table, export_to_excel_bytes

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

LOAD_TYPES = ["pedestrian", "light", "heavy", "railway"]


# -----------------------------
# UI Helpers
# -----------------------------
def _service() -> DesignService:
    # One service (and session store) per browser session
    if "service" not in st.session_state:
        st.session_state["service"] = DesignService(config=CausewayConfig.from_env())
    return st.session_state["service"]


def _template_defaults() -> DesignInput:
    label = st.selectbox("Start from template", ["(custom)"] + template_names(), index=0)
    if label == "(custom)":
        return DesignInput(length=100, width=8, height=2, water_depth=1.5)
    template = get_template(label)
    st.caption(template.description)
    return template.inputs


def _region_select(key: str) -> str:
    # configured default region is listed first
    return st.selectbox("Cost region", service.region_choices(), index=0, key=key)


# -----------------------------
# Sidebar inputs
# -----------------------------
st.set_page_config(page_title="Submersible Causeway Designer", layout="wide")
st.title("Submersible Causeway Design")

service = _service()

with st.sidebar:
    st.header("Template")
    base = _template_defaults()

    st.divider()
    st.header("Geometry")
    length = st.number_input("Length L (m)", min_value=1.0, max_value=1000.0, value=float(base.length), step=1.0)
    width = st.number_input("Width W (m)", min_value=0.5, max_value=50.0, value=float(base.width), step=0.5)
    height = st.number_input("Height H (m)", min_value=0.2, max_value=20.0, value=float(base.height), step=0.1)
    water_depth = st.number_input("Water depth (m)", min_value=0.0, max_value=20.0, value=float(base.water_depth), step=0.1)

    st.divider()
    st.header("Site & criteria")
    soil_values = [s.value for s in SoilType]
    soil = st.selectbox("Soil type", soil_values, index=soil_values.index(base.soil_type) if base.soil_type in soil_values else 1)
    load = st.selectbox("Load type", LOAD_TYPES, index=LOAD_TYPES.index(base.load_type) if base.load_type in LOAD_TYPES else 1)
    sf = st.number_input("Required safety factor", min_value=1.0, max_value=10.0, value=float(base.safety_factor), step=0.1)

    st.divider()
    run_calc = st.button("Calculate", type="primary")


# -----------------------------
# Build input object & run
# -----------------------------
inp = DesignInput(
    length=float(length),
    width=float(width),
    height=float(height),
    water_depth=float(water_depth),
    soil_type=soil,
    load_type=load,
    safety_factor=float(sf),
)

if run_calc:
    try:
        st.session_state["result"] = service.calculate(inp)
    except CausewayError as exc:
        st.session_state.pop("result", None)
        st.error(str(exc))

result = st.session_state.get("result")

if result is not None:
    try:
        report = service.optimize(result)
        env = service.assess_environment(result)
        health = service.score(result)
    except CausewayError as exc:
        st.error(str(exc))
        st.stop()

    tab_design, tab_cost, tab_env, tab_sessions = st.tabs(
        ["Design", "Cost", "Environment & health", "Sessions"]
    )

    with tab_design:
        col1, col2 = st.columns((1, 1), gap="large")
        with col1:
            st.subheader("Structural results")
            st.dataframe(build_results_table(result), use_container_width=True)
            with st.expander("Calculation trace"):
                st.dataframe(
                    pd.DataFrame([step.__dict__ for step in result.trace]),
                    use_container_width=True,
                )

        with col2:
            rec = result.recommendation
            st.subheader("Outcome")
            st.metric(
                label=f"Safety margin (required ≥ {result.inputs.safety_factor:g})",
                value=f"{result.safety_margin:.2f}",
                delta="SAFE" if rec.is_safe else "NOT SAFE",
                delta_color="normal" if rec.is_safe else "inverse",
            )
            st.write(f"**Foundation:** {rec.foundation_type.value}")
            st.write(f"**Construction method:** {rec.construction_method.value}")
            if rec.considerations is not None:
                for note in rec.considerations.notes:
                    st.write(f"- {note}")

            st.subheader("Optimisation")
            st.caption(report.summary)
            for s in report.suggestions:
                st.info(f"**{s.type.value}**: {s.suggestion} ({s.potential_savings}, {s.impact.value})")
            if report.is_safe:
                st.caption(report.safety_note)

        # Optional length sweep
        st.markdown("### Length sweep")
        if st.checkbox("Enable length sweep"):
            l_min = st.number_input("L_min (m)", min_value=1.0, max_value=float(length), value=max(1.0, float(length) / 2))
            l_max = st.number_input("L_max (m)", min_value=float(length), max_value=2000.0, value=float(length) * 2)
            npts = st.slider("Points", min_value=5, max_value=50, value=20, step=1)

            l_vals = np.linspace(float(l_min), float(l_max), int(npts))
            margins = [service.calculate(replace(inp, length=float(l))).safety_margin for l in l_vals]
            st.pyplot(plot_margin_sweep(l_vals, margins, safety_factor=inp.safety_factor), clear_figure=True)

    with tab_cost:
        region = _region_select("cost_region")
        try:
            estimate = service.estimate_cost(result.materials, region)
        except CausewayError as exc:
            st.error(str(exc))
        else:
            st.metric(label=f"Total cost ({estimate.currency})", value=f"{estimate.total:,.0f}")
            st.dataframe(build_cost_table(estimate), use_container_width=True)
            st.pyplot(plot_cost_breakdown(estimate.breakdown), clear_figure=True)

            st.download_button(
                "Download Excel report",
                data=export_to_excel_bytes(
                    result, estimate=estimate, report=report, environment=env, health=health
                ),
                file_name="causeway_design.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )

    with tab_env:
        col1, col2 = st.columns((1, 1), gap="large")
        with col1:
            st.subheader("Environmental impact")
            st.metric(label="Impact score", value=f"{env.impact_score:.1f}", delta=env.rating.value)
            st.write(f"Carbon footprint: {env.carbon.tonnes:,.1f} t CO2e")
            st.write(
                f"Flow obstruction: {env.water.flow_obstruction:.1f}% "
                f"(channel width {env.water.channel_width:g} m)"
            )
            st.write(f"Scour depth: {env.water.scour_depth:.2f} m")
            for line in env.recommendations:
                st.write(f"- {line}")
        with col2:
            st.subheader(f"Health score: {health.overall} ({health.rating.value})")
            st.pyplot(plot_health_scores(health.scores.as_dict(), overall=health.overall), clear_figure=True)
            for r in health.recommendations:
                st.write(f"- **{r.category}** ({r.priority}): {r.message}")

    with tab_sessions:
        name = st.text_input("Session name", value="")
        if st.button("Save current design"):
            sid = service.save_session(name or None, result.inputs, result)
            st.success(f"Saved session {sid[:8]}")

        sessions = service.list_sessions()
        if sessions:
            st.dataframe(
                pd.DataFrame([{"id": s.id[:8], "name": s.name, "saved": s.timestamp} for s in sessions]),
                use_container_width=True,
            )

        if len(sessions) >= 2:
            labels = {f"{s.name} ({s.id[:8]})": s.id for s in sessions}
            baseline = st.selectbox("Baseline", list(labels), index=0)
            candidate = st.selectbox("Candidate", list(labels), index=1)
            cmp_region = _region_select("compare_region")
            if st.button("Compare"):
                try:
                    cmp = service.compare(labels[baseline], labels[candidate], cmp_region)
                except CausewayError as exc:
                    st.error(str(exc))
                else:
                    st.dataframe(build_comparison_table(cmp), use_container_width=True)
                    st.success(f"{cmp.recommendation} (preferred: {cmp.preferred})")
        else:
            st.caption("Save at least two designs to compare them.")

    st.divider()
    st.caption("Closed-form screening model. Verify final designs against the governing code of practice.")
else:
    st.info("Set your inputs in the sidebar and click **Calculate** to see results.")
