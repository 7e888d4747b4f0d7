"""
Sweep configuration for the clock page-fault simulator.

Holds the bounds the command line and the Streamlit page both enforce,
and the SweepConfig dataclass that carries one experiment's settings.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import random
import time
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_TRACE_LENGTH = 16       # Shortest trace an experiment may use
MIN_PAGE_COUNT = 8          # Fewest distinct pages an experiment may use
FIRST_FRAME_COUNT = 4       # The sweep always starts at 4 frames

REPORT_FILENAME = "pageFaults.csv"
REPORT_HEADER = ("Frames", "Page Faults")


class UsageError(ValueError):
    """Raised when an experiment is configured outside its allowed bounds."""


# =============================================================================
# SWEEP CONFIGURATION
# =============================================================================

@dataclass
class SweepConfig:
    """
    Settings for one experiment: a single trace replayed for every frame count.

    Attributes:
        trace_length (int): Number of page references in the trace (n)
        page_count (int): Number of distinct pages (p)
        seed (Optional[int]): Random seed, None to seed from the clock
        output_path (str): Where the CSV report is written
        legacy_clock (bool): Share one clock hand across all trials
        first_frame_count (int): Smallest frame count in the sweep
    """
    trace_length: int
    page_count: int
    seed: Optional[int] = None
    output_path: str = REPORT_FILENAME
    legacy_clock: bool = False
    first_frame_count: int = FIRST_FRAME_COUNT

    def validate(self):
        """
        Check the trace length and page count against their lower bounds.

        Raises:
            UsageError: If n < 16 or p < 8
        """
        if self.trace_length < MIN_TRACE_LENGTH:
            raise UsageError(f"n must be >= {MIN_TRACE_LENGTH}.")
        if self.page_count < MIN_PAGE_COUNT:
            raise UsageError(f"p must be >= {MIN_PAGE_COUNT}.")
        return self

    @property
    def frame_counts(self) -> range:
        """Frame counts covered by the sweep, inclusive of page_count."""
        return range(self.first_frame_count, self.page_count + 1)

    def make_rng(self) -> random.Random:
        """
        Build the random source for this experiment.

        Seeded once: from `seed` when given, otherwise from the system clock,
        so unseeded runs are not reproducible.
        """
        seed = self.seed if self.seed is not None else time.time_ns()
        return random.Random(seed)
