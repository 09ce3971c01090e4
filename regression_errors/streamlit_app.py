import streamlit as st

from regression_errors.utils.analysis import run_analysis
from regression_errors.utils.config import load_cfg
from regression_errors.utils.db import OBSERVATIONS_TABLE, get_con, table_exists
from regression_errors.utils.glossary import METRIC_TOOLTIPS
from regression_errors.utils.insights import DegenerateInputError
from regression_errors.utils.quality import check_observations

APP_TITLE = "Regression Error Metrics"
CFG = load_cfg()
PREDICTOR = CFG["predictor"]
RESPONSE = CFG["response"]

st.set_page_config(page_title=APP_TITLE, layout="wide")

# ---- Header / status ----
with st.sidebar:
    st.markdown(f"### {APP_TITLE}")
    st.caption("NumPy + DuckDB + matplotlib + Streamlit")
    st.write(f"**Model:** `{RESPONSE} ~ {PREDICTOR}`")
    st.write(f"**Table:** `{OBSERVATIONS_TABLE}`")

st.title(APP_TITLE)
st.write("Use the left sidebar to switch pages. This home view shows the error decomposition summary.")

# ---- Health checks ----
def health() -> dict:
    checks = {}
    checks["table_present"] = table_exists(OBSERVATIONS_TABLE)
    try:
        checks["contract_failures"] = check_observations(get_con(), PREDICTOR, RESPONSE)
    except KeyError as e:
        checks["contract_failures"] = [str(e)]
    return checks

with st.expander("Health checks", expanded=False):
    h = health()
    st.write(f"Observation table present: **{h['table_present']}**")
    if h["contract_failures"]:
        st.json(h["contract_failures"])
    else:
        st.write("All data contracts passed.")

# ---- Metric tiles ----
def render_metrics():
    try:
        analysis = run_analysis(PREDICTOR, RESPONSE)
    except DegenerateInputError as e:
        st.error(f"Cannot fit `{RESPONSE} ~ {PREDICTOR}` ({e.check}): {e}")
        st.stop()
    except KeyError as e:
        st.error(f"Check `predictor`/`response` in config/config.yaml: {e}")
        st.stop()

    m = analysis.metrics
    cols = st.columns(6)
    def tile(col, label, value, fmt="{:,.3f}"):
        with col:
            st.caption(label)
            st.caption(METRIC_TOOLTIPS[label])
            st.metric(label=label, value=fmt.format(value), label_visibility="collapsed")

    tile(cols[0], "SST", m.sst)
    tile(cols[1], "SSR", m.ssr)
    tile(cols[2], "SSE", m.sse)
    tile(cols[3], "MSE", m.mse)
    tile(cols[4], "R-squared", m.r2, "{:.4f}")
    tile(cols[5], "MAD", m.mad)

    st.caption(
        f"Fit: {RESPONSE} = {analysis.fit.intercept:.4f} + ({analysis.fit.slope:.4f}) × {PREDICTOR} "
        f"over {m.n} observations. SST − (SSR + SSE) = {m.sst - (m.ssr + m.sse):.2e}."
    )
    with st.expander("Observations with fitted values", expanded=False):
        st.dataframe(analysis.frame, use_container_width=True)

render_metrics()

st.caption("Tip: run `python scripts/error_metrics.py` for the console summary and chart windows.")
