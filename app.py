"""
Clock Page-Fault Visualizer — Second-Chance Replacement over a Random Trace

This application runs the same experiment as the `pagefaults` command:
    - Generate one random page trace (no page repeats back-to-back)
    - Replay it for every frame count from 4 to P using the clock algorithm
    - Plot the page faults per frame count and offer the CSV report

One trial of the sweep can be inspected in detail: its final frames, page
table, statistics and the most recent access events.

Built with Streamlit for the web interface and Plotly for visualizations.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

from config import (MIN_PAGE_COUNT, MIN_TRACE_LENGTH, REPORT_FILENAME,
                    SweepConfig, UsageError)
from engine import ClockEvictor, PageFaultSimulator, generate_trace, run_sweep, simulate
from pagefaults import format_report
from utils import get_color, sweep_rows


# Configure the Streamlit page
st.set_page_config(page_title="Clock Page-Fault Visualizer", layout="wide")

# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Clock Page-Fault Visualizer — Second-Chance Replacement")

# =============================================================================
# CONCEPTS PAGE
# =============================================================================

if page == "Concepts":
    st.header("How the Simulation Works")
    st.markdown(
        """
        ### **1. Page Trace**
        - A sequence of N page numbers drawn from `[0, P)`.
        - The first page is random; each next page is random among the other P - 1 pages,
          so a page is never referenced twice in a row.

        ### **2. Page Table**
        - One entry per page with a **valid bit** (resident or not), a **reference bit**
          and the **frame** it occupies.
        - Every access sets the reference bit, whether or not the page is resident.

        ### **3. Page Fault**
        - An access to a page that is not resident.
        - A free frame is used if one is left; otherwise a resident page is evicted.

        ### **4. Second Chance (Clock)**
        - A hand sweeps the page table in a circle.
        - Resident page with reference bit set → bit cleared, page kept (second chance).
        - Resident page with reference bit clear → evicted, its frame reused.

        ### **5. Legacy Clock**
        - By default every frame count starts with the hand at page 0.
        - With *legacy clock* the hand carries over from one frame count to the next,
          so results depend on the order the trials run in.
        """
    )
    st.stop()

# -----------------------------------------------------------------------------
# SIDEBAR - Experiment Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Experiment Settings")

trace_length = st.sidebar.number_input("Trace length N", min_value=MIN_TRACE_LENGTH,
                                       max_value=100000, value=64, step=16)
page_count = st.sidebar.number_input("Page count P", min_value=MIN_PAGE_COUNT,
                                     max_value=256, value=12, step=1)
seed_text = st.sidebar.text_input("Seed (blank = system clock)", value="")
legacy_clock = st.sidebar.checkbox("Legacy clock (hand shared across frame counts)")

if st.sidebar.button("New Trace"):
    st.session_state.pop("trace_key", None)

try:
    config = SweepConfig(
        trace_length=int(trace_length),
        page_count=int(page_count),
        seed=int(seed_text) if seed_text.strip() else None,
        legacy_clock=legacy_clock,
    ).validate()
except (UsageError, ValueError) as e:
    st.error(str(e))
    st.stop()

# -----------------------------------------------------------------------------
# SESSION STATE - Trace Persistence
# -----------------------------------------------------------------------------

# Keep the trace across reruns until N, P or the seed change
trace_key = (config.trace_length, config.page_count, config.seed)
if st.session_state.get("trace_key") != trace_key:
    st.session_state.trace_key = trace_key
    st.session_state.trace = generate_trace(config.trace_length, config.page_count,
                                            config.make_rng())

trace = st.session_state.trace
results = run_sweep(trace, config.page_count,
                    first_frame_count=config.first_frame_count,
                    legacy_clock=config.legacy_clock)

st.sidebar.markdown("---")
st.sidebar.header("Inspect One Trial")
inspect_frames = st.sidebar.slider("Frame count", min_value=config.first_frame_count,
                                   max_value=config.page_count, value=config.first_frame_count)

# Replay the chosen trial with event recording on. In legacy mode the hand
# must first travel through every smaller frame count.
evictor = None
if config.legacy_clock:
    evictor = ClockEvictor()
    for frames in range(config.first_frame_count, inspect_frames):
        simulate(trace, frames, config.page_count, evictor)
sim = PageFaultSimulator(inspect_frames, config.page_count, evictor=evictor, record_events=True)
sim.run(trace)

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

with col1:
    st.subheader("Trace")
    st.write(", ".join(map(str, trace)))

    st.subheader("Faults per Frame Count")
    st.table(sweep_rows(results))

    st.download_button(
        f"Download {REPORT_FILENAME}",
        data=format_report(results),
        file_name=REPORT_FILENAME,
        mime="text/csv",
    )

    st.subheader("Event Log")
    for ev in sim.event_log[-20:][::-1]:
        st.write(ev)

with col2:
    # ----- Fault Curve -----
    st.subheader("Page Faults vs Frames")
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[r.frames for r in results],
        y=[r.page_faults for r in results],
        mode="lines+markers",
    ))
    fig.update_layout(height=300, xaxis_title="Frames", yaxis_title="Page Faults")
    st.plotly_chart(fig, use_container_width=True)

    # ----- Final Frame Table of the Inspected Trial -----
    st.subheader(f"Frames after the Trace ({inspect_frames} frames)")
    ptable = sim.get_page_table_snapshot()
    x, y, text, colors = [], [], [], []
    for frame_no, page_no in enumerate(sim.get_frame_table()):
        pte = ptable.get(page_no) if page_no is not None else None
        resident = pte is not None and pte.valid and pte.frame_no == frame_no
        label = f"F{frame_no}: " + (f"P{page_no}" if resident else "Free")
        text.append(label)
        colors.append(get_color(resident, resident and pte.referenced))
        x.append(frame_no)
        y.append(1)

    fig2 = go.Figure()
    fig2.add_trace(go.Bar(x=x, y=y, text=text, marker_color=colors,
                          hovertext=text, hoverinfo="text"))
    fig2.update_layout(height=150, showlegend=False, yaxis=dict(showticklabels=False))
    st.plotly_chart(fig2, use_container_width=True)

    # ----- Page Table Display -----
    st.subheader("Page Table (snapshot)")
    st.table([{
        "page": pno,
        "valid": pte.valid,
        "referenced": pte.referenced,
        "frame": pte.frame_no,
    } for pno, pte in sorted(ptable.items())])

    # ----- Statistics Display -----
    st.subheader("Statistics")
    stats = sim.get_stats()
    st.metric("Page Accesses", stats["total_refs"])
    st.metric("Page Faults", stats["faults"])
    st.metric("Evictions", stats["evictions"])
    st.metric("Hit Ratio", stats["hit_ratio"])
    st.write(f"Clock hand stopped at page {sim.evictor.hand.position}, "
             f"{sim.evictor.second_chances} second chances granted.")
