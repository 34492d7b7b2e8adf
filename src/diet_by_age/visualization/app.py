"""
Streamlit page for the dietary-intake-by-age chart.

Run with: streamlit run src/diet_by_age/visualization/app.py
Single-page design with:
- Layout preset and trimming controls
- The small-multiples chart
- Collapsed peak-age summary table
"""

import streamlit as st

from diet_by_age.config import DEFAULT_LAYOUT, LAYOUT_PRESETS, PipelineConfig, get_layout
from diet_by_age.constants import DATA_URL, TRIM_COUNT
from diet_by_age.data_utils import load_dietary_data
from diet_by_age.pipeline import run_pipeline
from diet_by_age.preparation import summaries_to_dataframe
from diet_by_age.visualization.charts import create_small_multiples_chart


def main():
    """Main Streamlit app."""
    st.set_page_config(
        page_title="Diet by Age",
        page_icon=None,
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    st.title("Diet by Age")

    source = st.text_input("Data source (URL or CSV path)", value=DATA_URL)

    # Load data
    with st.spinner("Loading dietary data..."):
        try:
            raw = load_dietary_data(source)
        except (RuntimeError, FileNotFoundError) as e:
            st.error(f"Could not load data: {e}")
            return

    if raw.empty:
        st.warning("The dataset has no rows.")
        return

    preset_col, trim_col = st.columns(2)
    with preset_col:
        presets = sorted(LAYOUT_PRESETS)
        preset = st.selectbox(
            "Layout",
            options=presets,
            index=presets.index(DEFAULT_LAYOUT),
            help="Geometry preset for the chart",
        )
    trim_count = 0
    if len(raw) > 1:
        with trim_col:
            trim_count = st.slider(
                "Drop last rows",
                min_value=0,
                max_value=len(raw) - 1,
                value=min(TRIM_COUNT, len(raw) - 1),
                help="Trims the sparse tail ages from the age axis",
            )

    layout = get_layout(preset)
    model = run_pipeline(raw, PipelineConfig(trim_count=trim_count), layout)

    if model.is_empty:
        st.info("No nutrient columns left after filtering.")
    st.plotly_chart(create_small_multiples_chart(model, layout), use_container_width=False)

    with st.expander("Peak Age Summary", expanded=False):
        summary_df = summaries_to_dataframe(model.ordering)
        st.dataframe(
            summary_df[["nutrient", "peak_value", "peak_age"]],
            use_container_width=True,
            hide_index=True,
        )
        st.download_button(
            label="Download Summary as CSV",
            data=summary_df.to_csv(index=False),
            file_name="diet_by_age_peaks.csv",
            mime="text/csv",
        )


if __name__ == "__main__":
    main()
