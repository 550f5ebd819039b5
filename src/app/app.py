import pandas as pd
import streamlit as st

from zonewiz.aggregate import grouped_series, series_table, summary_table
from zonewiz.bands import BANDS
from zonewiz.chart import build_line_chart
from zonewiz.config import GROUP_COLORS, data_csv
from zonewiz.data import load_anomalies_safe
from zonewiz.exceptions import ZoneWizError
from zonewiz.grouping import GroupAssignment
from zonewiz.latmap import apply_clicks, build_lat_map
from zonewiz.log import get_logger

log = get_logger("app")

QUERY_KEYS = {"g1", "g2", "g3"}

GUIDE_MD = """
**ZoneWiz** compares how different parts of the globe have warmed. The world is cut
into six 30° latitude bands; you group them and the chart shows the mean
**temperature anomaly** (change relative to a reference baseline) of each group per year.

**How to use it**
1. Click a band on the map (or its button below the map). Each click moves the band
   along *Group 1 → Group 2 → Group 3 → unassigned → Group 1*.
2. The chart redraws with one line per non-empty group.
3. **Clear all** unassigns every band; **Restore defaults** groups poles, mid-latitudes
   and tropics.
4. The URL carries the current grouping, so a view can be shared.

**Reading the chart**
- Lines above zero are warmer than the baseline, below zero cooler.
- Year-to-year wiggles are natural variability; the trend over decades tells the story.
- High latitudes typically warm faster than the tropics (polar amplification).

**Methodology (short)**
- Anomalies: each latitude's annual mean minus its mean over the reference window.
- A group's value for a year is the plain mean over all samples in its bands; samples
  exactly on a band edge count for both neighbouring bands.
"""

st.set_page_config(page_title="ZoneWiz", page_icon="🌍", layout="wide")
st.markdown("""
<style>
.block-container { padding-top: 1.5rem !important; }
.st-key-latmap, .st-key-linechart { border:1px solid rgba(0,0,0,.08); border-radius:10px; padding:6px; }
.group-chip { display:inline-block; width:10px; height:10px; border-radius:2px; margin-right:6px; }
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner=False)
def load_data(csv_path: str) -> pd.DataFrame:
    return load_anomalies_safe(csv_path)


def current_groups() -> GroupAssignment:
    return GroupAssignment.from_dict(st.session_state.groups)


def store_groups(groups: GroupAssignment) -> None:
    st.session_state.groups = groups.to_dict()


def cycle_band(band_id: int) -> None:
    groups = current_groups()
    groups.cycle(band_id)
    store_groups(groups)


def clear_groups() -> None:
    store_groups(GroupAssignment())


def restore_groups() -> None:
    store_groups(GroupAssignment.defaults())


def init_state() -> None:
    if "groups" in st.session_state:
        return
    seeded = None
    try:
        seeded = GroupAssignment.from_query(st.query_params.to_dict())
    except ZoneWizError as e:
        log.warning("ignoring grouping in URL: %s", e)
    store_groups(seeded if seeded is not None else GroupAssignment.defaults())
    st.session_state.map_nonce = 0


def sync_query(groups: GroupAssignment) -> None:
    wanted = groups.to_query()
    current = {k: v for k, v in st.query_params.to_dict().items() if k in QUERY_KEYS}
    if current != wanted:
        for k in current:
            del st.query_params[k]
        st.query_params.update(wanted)


st.title("🌍 ZoneWiz: zonal temperature anomalies")
with st.expander("Guide"):
    st.markdown(GUIDE_MD)

df = load_data(str(data_csv()))
if df.empty:
    st.error(f"No anomaly data could be loaded from {data_csv()}. Check the file and the logs.")
    st.stop()

init_state()
groups = current_groups()
sync_query(groups)
series = grouped_series(df, groups)

col_map, col_chart = st.columns([2, 3])

with col_map:
    with st.container(key="latmap"):
        event = st.plotly_chart(build_lat_map(groups), key=f"latmap-{st.session_state.map_nonce}",
                                on_select="rerun", selection_mode="points",
                                use_container_width=True, config={"displayModeBar": False})
        clicked_groups = current_groups()
        if apply_clicks(clicked_groups, event):
            store_groups(clicked_groups)
            # fresh key drops the consumed selection
            st.session_state.map_nonce += 1
            st.rerun()

        for col, band in zip(st.columns(len(BANDS)), reversed(BANDS)):
            gid = groups.group_of(band.id)
            col.button(f"{band.label}\n\n{'–' if gid is None else f'G{gid}'}", key=f"band-{band.id}",
                       on_click=cycle_band, args=(band.id,), use_container_width=True,
                       type="secondary" if gid is None else "primary")

    b1, b2 = st.columns(2)
    b1.button("Clear all", key="clear", on_click=clear_groups, use_container_width=True)
    b2.button("Restore defaults", key="defaults", on_click=restore_groups, use_container_width=True)

    legend = " ".join(
        f'<span class="group-chip" style="background:{GROUP_COLORS[g]}"></span>Group {g}&nbsp;&nbsp;'
        for g in GROUP_COLORS)
    st.markdown(legend, unsafe_allow_html=True)

with col_chart:
    with st.container(key="linechart"):
        st.plotly_chart(build_line_chart(series, groups), use_container_width=True, key="chart")

    if series:
        st.dataframe(summary_table(series), hide_index=True, use_container_width=True,
                     column_config={
                         "group": "Group", "bands": "Bands",
                         "first_year": st.column_config.NumberColumn("From", format="%d"),
                         "last_year": st.column_config.NumberColumn("To", format="%d"),
                         "latest_tas": st.column_config.NumberColumn("Latest ΔT (°C)", format="%.2f"),
                         "trend_c_per_decade": st.column_config.NumberColumn("Trend (°C/decade)", format="%.2f"),
                     })
        st.download_button("Download grouped series (CSV)", series_table(series).to_csv(index=False),
                           file_name="zonewiz_groups.csv", mime="text/csv", key="export")
    else:
        st.info("No group has any bands yet.")
