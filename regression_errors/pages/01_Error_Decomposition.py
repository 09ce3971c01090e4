import matplotlib.pyplot as plt
import streamlit as st

from regression_errors.utils.analysis import run_analysis
from regression_errors.utils.charts import decomposition_chart, segment_panels
from regression_errors.utils.config import load_cfg
from regression_errors.utils.insights import SEGMENT_TYPES, DegenerateInputError

st.set_page_config(page_title="Error Decomposition", layout="wide")

CFG = load_cfg()
st.title("Error Decomposition")

try:
    analysis = run_analysis(CFG["predictor"], CFG["response"])
except DegenerateInputError as e:
    st.error(f"Cannot fit the model ({e.check}): {e}")
    st.stop()

# -------- Combined view --------
st.subheader("SST, SSR and SSE around the fitted line")
fig = decomposition_chart(analysis, CFG)
st.pyplot(fig)
plt.close(fig)

st.caption(
    "SST: observed value to the mean. SSR: mean to the fitted value. SSE: fitted value to the observed value. "
    "Points are coloured by their segment label: above/below the mean and above/below the fitted line."
)

# -------- Segment counts --------
counts = (
    analysis.frame["segment_type"]
    .value_counts()
    .reindex(list(SEGMENT_TYPES), fill_value=0)
    .rename_axis("segment_type")
    .reset_index(name="observations")
)
left, right = st.columns([1, 2])
with left:
    st.dataframe(counts, use_container_width=True, hide_index=True)

# -------- One panel per component --------
with right:
    st.subheader("Each component on its own")
    fig = segment_panels(analysis, CFG)
    st.pyplot(fig)
    plt.close(fig)
