import matplotlib.pyplot as plt
import streamlit as st

from regression_errors.utils.analysis import run_analysis
from regression_errors.utils.charts import residual_chart, squared_error_histogram
from regression_errors.utils.config import load_cfg
from regression_errors.utils.insights import DegenerateInputError

st.set_page_config(page_title="Residual Diagnostics", layout="wide")

CFG = load_cfg()
st.title("Residual Diagnostics")

try:
    analysis = run_analysis(CFG["predictor"], CFG["response"])
except DegenerateInputError as e:
    st.error(f"Cannot fit the model ({e.check}): {e}")
    st.stop()

m = analysis.metrics
k1, k2, k3 = st.columns(3)
k1.metric("MSE", f"{m.mse:.3f}")
k2.metric("MAD", f"{m.mad:.3f}")
k3.metric("R²", f"{m.r2:.3f}")

left, right = st.columns(2)
with left:
    st.subheader("Residual plot")
    fig = residual_chart(analysis, CFG)
    st.pyplot(fig)
    plt.close(fig)
with right:
    st.subheader("Residual plot with MAD line")
    fig = residual_chart(analysis, CFG, mad=m.mad)
    st.pyplot(fig)
    plt.close(fig)

st.subheader("Distribution of squared errors")
fig = squared_error_histogram(analysis, CFG)
st.pyplot(fig)
plt.close(fig)

st.caption(
    "Residuals should scatter evenly around zero. The MAD line marks the average absolute miss; "
    "the MSE line marks the average squared miss, which large residuals pull to the right."
)
