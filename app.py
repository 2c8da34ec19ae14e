"""
Interactive flags workshop: explore colour sets as Venn, Euler and upset views
"""
import streamlit as st
from dotenv import load_dotenv
import os
import matplotlib.pyplot as plt

from flagsets.config import load_config
from flagsets.data_ingest import COLOR_COLUMNS, load_flags
from flagsets.transforms import to_long, color_sets, set_sizes, check_membership_counts
from flagsets.exploration import (
    color_frequency_plotly,
    bars_stripes_chart,
    colors_per_flag_chart,
)
from flagsets.venn import venn_diagram
from flagsets.euler import euler_diagram
from flagsets.upset import UpsetOptions, Highlight, upset_plot

# Load environment variables (FLAGSETS_SOURCE, FLAGSETS_CONFIG)
load_dotenv()


@st.cache_data
def _load(source: str, timeout: int):
    return load_flags(source, timeout=timeout)


def _show(fig):
    # Streamlit reruns the script on every interaction; release each figure
    st.pyplot(fig)
    plt.close(fig)


def main():
    # Page config
    st.set_page_config(page_title="Flag Set Intersections", layout="wide")
    st.title("European Flags: Visualizing Set Intersections")

    try:
        cfg = load_config(os.environ.get("FLAGSETS_CONFIG", "config/flagsets.yaml"))
        flags = _load(cfg["source"], int(cfg["http_timeout"]))
        long_df = to_long(flags)
        sets = color_sets(long_df)
        check_membership_counts(flags, sets)

        # Overview metrics
        cols = st.columns(3)
        with cols[0]:
            st.metric("Flags", len(flags))
        with cols[1]:
            st.metric("Colours", sum(1 for v in sets.values() if v))
        with cols[2]:
            st.metric("Long-form rows", len(long_df))

        st.subheader("Exploration")
        st.plotly_chart(color_frequency_plotly(flags), use_container_width=True)
        left, right = st.columns(2)
        with left:
            _show(bars_stripes_chart(flags))
        with right:
            _show(colors_per_flag_chart(flags))
        with st.expander("Long form table"):
            st.dataframe(long_df)
        st.dataframe(set_sizes(sets).to_frame())

        st.subheader("Venn and Euler diagrams")
        chosen = st.multiselect("Colours", list(COLOR_COLUMNS), default=cfg["venn_colors"])
        left, right = st.columns(2)
        with left:
            if 2 <= len(chosen) <= 6:
                _show(venn_diagram(sets, chosen).figure)
            else:
                st.info("Pick 2 to 6 colours for a Venn diagram")
        with right:
            if len(chosen) in (2, 3):
                _show(euler_diagram(sets, chosen).figure)
            else:
                st.info("Euler diagrams support 2 or 3 colours")

        st.subheader("Upset plot")
        upset_cfg = cfg.get("upset", {})
        options = UpsetOptions.from_dict(upset_cfg.get("options"))
        options.min_subset_size = st.slider("Minimum intersection size", 1, 10, int(options.min_subset_size or 1))
        options.max_degree = st.slider("Maximum colours per intersection", 1, len(COLOR_COLUMNS), int(options.max_degree or len(COLOR_COLUMNS)))
        options.present = st.multiselect("Must include", list(COLOR_COLUMNS))
        highlights = [Highlight.from_dict(h) for h in upset_cfg.get("highlights", [])]
        try:
            _show(upset_plot(flags, options, highlights, upset_cfg.get("catplots", [])))
        except ValueError as e:
            st.info(str(e))
    except Exception as e:
        st.error(f"Error: {str(e)}")


if __name__ == "__main__":
    main()
