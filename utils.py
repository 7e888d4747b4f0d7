# utils.py

from typing import Dict, List, Sequence


def get_color(resident, referenced=False):
    """Return a color for a frame given the state of the page it holds."""
    if not resident:
        return "lightgray"
    # green = reference bit set, amber = next in line for eviction
    return "lightgreen" if referenced else "#f5c26b"


def sweep_rows(results: Sequence) -> List[Dict[str, int]]:
    """Turn SweepResult objects into rows for st.table."""
    return [{"frames": r.frames, "page_faults": r.page_faults} for r in results]
