# Centralized labels/help text shared by the console summary and the app.

SUMMARY_LABELS = {
    "sst": "Sum of Squares Total (SST)",
    "ssr": "Sum of Squares Regression (SSR)",
    "sse": "Sum of Squares Error (SSE)",
    "mse": "Mean Squared Error (MSE)",
    "r2": "R-squared",
}

METRIC_TOOLTIPS = {
    "SST": "Sum of Squares Total = total variation of observed values around their mean.",
    "SSR": "Sum of Squares Regression = variation of fitted values around the mean (explained by the model).",
    "SSE": "Sum of Squares Error = sum of squared residuals (unexplained variation).",
    "MSE": "Mean Squared Error = SSE divided by the number of observations.",
    "R-squared": "Share of total variation explained by the model = SSR / SST.",
    "MAD": "Mean Absolute Deviation = average absolute residual.",
}

SEGMENT_COLORS = {
    "SST": "red",
    "SSR": "orange",
    "SSE": "blue",
    "Other": "gray",
}
