# engine.py
"""
Simulation engine for the second-chance (clock) page-replacement policy.

Three pieces live here:
    - Trace generation: random page references with no immediate repeats
    - The clock evictor: second-chance victim selection over a page table
    - The page-fault simulator: replays a trace against a fixed frame pool

run_sweep() ties them together for one experiment, replaying the same trace
once per frame count.
"""

import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from config import FIRST_FRAME_COUNT


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class PageTableEntry:
    """
    Represents a single entry in the Page Table.

    Attributes:
        page_no (int): The page number this entry represents
        frame_no (Optional[int]): Frame holding the page, None if not resident
        valid (bool): True if the page is currently resident
        referenced (bool): True if accessed since the clock last cleared it
    """
    page_no: int
    frame_no: Optional[int] = None
    valid: bool = False
    referenced: bool = False


@dataclass
class SweepResult:
    """Fault count for one frame-count trial of a sweep."""
    frames: int
    page_faults: int


# =============================================================================
# TRACE GENERATION
# =============================================================================

def rand_not_j(j: int, k: int, rng=random) -> int:
    """
    Return a uniformly random integer in [0, k) other than j.

    Draws from the k - 1 remaining values and shifts anything at or above
    j up by one.

    Raises:
        ValueError: If j is not in [0, k)
    """
    if not 0 <= j < k:
        raise ValueError(f"j must be in [0, {k}), got {j}")
    res = rng.randrange(k - 1)
    return res if res < j else res + 1


def generate_trace(n: int, p: int, rng=random) -> Tuple[int, ...]:
    """
    Generate a page trace of length n with page numbers in [0, p).

    The first page is unrestricted; every later page differs from the one
    right before it.

    Args:
        n (int): Trace length
        p (int): Number of distinct pages
        rng: Random source, the `random` module unless one is given

    Returns:
        Tuple[int, ...]: The trace
    """
    if n <= 0:
        return ()
    trace = [rng.randrange(p)]
    for _ in range(1, n):
        trace.append(rand_not_j(trace[-1], p, rng))
    return tuple(trace)


# =============================================================================
# CLOCK EVICTION
# =============================================================================

class ClockHand:
    """
    Cursor over page-table indices that wraps around the end of the table.

    Attributes:
        position (int): Index the next scan starts from
    """

    def __init__(self, position: int = 0):
        self.position = position

    def scan(self, page_table: Sequence[PageTableEntry]) -> Iterator[Tuple[int, PageTableEntry]]:
        """
        Yield (index, entry) pairs starting at the hand, forever.

        The hand moves to the next slot each time the consumer asks for the
        next pair. A consumer that stops early must call advance() itself
        if it wants the hand past the last yielded slot.
        """
        size = len(page_table)
        while True:
            self.position %= size
            yield self.position, page_table[self.position]
            self.position = (self.position + 1) % size

    def advance(self, size: int):
        self.position = (self.position + 1) % size


class ClockEvictor:
    """
    Second-chance victim selection.

    Scans resident pages from the clock hand. A referenced page has its
    reference bit cleared and is skipped; the first resident page found
    with the bit already clear is evicted.

    Attributes:
        hand (ClockHand): Scan cursor, kept between evictions
        evictions (int): Pages evicted so far
        second_chances (int): Reference bits cleared so far
        last_victim (Optional[int]): Page number of the most recent victim
    """

    def __init__(self, hand: Optional[ClockHand] = None):
        self.hand = hand if hand is not None else ClockHand()
        self.evictions = 0
        self.second_chances = 0
        self.last_victim: Optional[int] = None

    def evict(self, page_table: Sequence[PageTableEntry]) -> int:
        """
        Evict one resident page and return the frame it occupied.

        The page table must hold at least one resident page, otherwise the
        scan never ends. Only the valid bit and frame are cleared on the
        victim; its reference bit is left alone.

        Args:
            page_table (Sequence[PageTableEntry]): Table to scan

        Returns:
            int: Frame number freed by the eviction
        """
        for _, entry in self.hand.scan(page_table):
            # Only resident pages can be victims
            if not entry.valid:
                continue

            if entry.referenced:
                entry.referenced = False
                self.second_chances += 1
                continue

            entry.valid = False
            frame_no = entry.frame_no
            entry.frame_no = None
            self.hand.advance(len(page_table))
            self.evictions += 1
            self.last_victim = entry.page_no
            return frame_no


# =============================================================================
# PAGE FAULT SIMULATOR
# =============================================================================

class PageFaultSimulator:
    """
    Replays page references against a fixed pool of frames.

    Free frames are handed out from the top of the pool (frame_count - 1
    first). Once none are left, every fault asks the clock evictor for a
    frame.

    Attributes:
        frame_count (int): Number of physical frames
        page_count (int): Number of distinct pages (page table size)
        page_table (List[PageTableEntry]): One entry per page
        frames (List[Optional[int]]): Page held by each frame, None if free
        frames_open (int): Frames never assigned yet
        evictor (ClockEvictor): Victim selection for full memory
        hits (int): Accesses that found their page resident
        faults (int): Accesses that did not
        evictions (int): Faults that needed a victim
        event_log (List[str]): Access events, if record_events is set
    """

    def __init__(self, frame_count: int, page_count: int,
                 evictor: Optional[ClockEvictor] = None,
                 record_events: bool = False):
        """
        Args:
            frame_count (int): Number of frames, at least 1
            page_count (int): Number of pages, at least 1
            evictor (Optional[ClockEvictor]): Evictor to share with other
                simulations; a fresh one per reset() when omitted
            record_events (bool): Keep an event log of every access

        Raises:
            ValueError: If frame_count or page_count is below 1
        """
        if frame_count < 1:
            raise ValueError("frame_count must be >= 1")
        if page_count < 1:
            raise ValueError("page_count must be >= 1")

        self.frame_count = frame_count
        self.page_count = page_count
        self.record_events = record_events
        self._shared_evictor = evictor
        self.reset()

    def reset(self):
        """Start over with an empty page table, free frames and zeroed stats."""
        self.page_table: List[PageTableEntry] = [PageTableEntry(i) for i in range(self.page_count)]
        self.frames: List[Optional[int]] = [None] * self.frame_count
        self.frames_open = self.frame_count
        self.evictor = self._shared_evictor if self._shared_evictor is not None else ClockEvictor()
        self.hits = 0
        self.faults = 0
        self.evictions = 0
        self.event_log: List[str] = []

    def _log(self, event: str):
        if self.record_events:
            self.event_log.append(event)

    def access_page(self, page_no: int) -> Tuple[bool, int]:
        """
        Access a page, handling hits, faults and eviction.

        Args:
            page_no (int): Page number to access

        Returns:
            Tuple[bool, int]:
                - bool: True if hit, False if fault
                - int: Frame now holding the page

        Raises:
            IndexError: If page_no is outside [0, page_count)
        """
        if not 0 <= page_no < self.page_count:
            raise IndexError(f"Page {page_no} outside [0, {self.page_count})")

        pte = self.page_table[page_no]
        pte.referenced = True

        # ----- PAGE HIT -----
        if pte.valid:
            self.hits += 1
            self._log(f"Hit: Page {page_no} in Frame {pte.frame_no}")
            return True, pte.frame_no

        # ----- PAGE FAULT -----
        self.faults += 1
        self._log(f"Fault: Page {page_no} not in memory")

        if self.frames_open:
            self.frames_open -= 1
            frame_no = self.frames_open
        else:
            # frame_count >= 1 pages are resident whenever no frame is open
            frame_no = self.evictor.evict(self.page_table)
            self.evictions += 1
            self._log(f"Evicting: Page {self.evictor.last_victim} from Frame {frame_no}")

        pte.frame_no = frame_no
        pte.valid = True
        self.frames[frame_no] = page_no
        self._log(f"Loaded: Page {page_no} -> Frame {frame_no}")
        return False, frame_no

    def run(self, trace: Sequence[int]) -> int:
        """
        Replay a trace from the current state.

        Returns:
            int: Page faults caused by this trace
        """
        faults_before = self.faults
        for page_no in trace:
            self.access_page(page_no)
        return self.faults - faults_before

    def get_frame_table(self) -> List[Optional[int]]:
        return list(self.frames)

    def get_page_table_snapshot(self) -> Dict[int, PageTableEntry]:
        """Copy of the page table keyed by page number."""
        return {pte.page_no: PageTableEntry(pte.page_no, pte.frame_no, pte.valid, pte.referenced)
                for pte in self.page_table}

    def get_stats(self) -> Dict[str, float]:
        """
        Calculate and return simulation statistics.

        Returns:
            Dict[str, float]: hits, faults, evictions, hit_ratio,
                fault_rate and total_refs
        """
        total_refs = self.hits + self.faults
        hit_ratio = (self.hits / total_refs) if total_refs > 0 else 0.0
        fault_rate = (self.faults / total_refs) if total_refs > 0 else 0.0

        return {
            "hits": self.hits,
            "faults": self.faults,
            "evictions": self.evictions,
            "hit_ratio": round(hit_ratio, 4),
            "fault_rate": round(fault_rate, 4),
            "total_refs": total_refs,
        }


def simulate(trace: Sequence[int], frame_count: int, page_count: int,
             evictor: Optional[ClockEvictor] = None) -> int:
    """
    Count the page faults of one trace with a fresh page table.

    The clock hand starts at 0 unless an evictor carrying an older hand is
    passed in.
    """
    return PageFaultSimulator(frame_count, page_count, evictor).run(trace)


# =============================================================================
# EXPERIMENT SWEEP
# =============================================================================

def run_sweep(trace: Sequence[int], page_count: int,
              first_frame_count: int = FIRST_FRAME_COUNT,
              legacy_clock: bool = False) -> List[SweepResult]:
    """
    Simulate the trace once for every frame count in [first_frame_count, page_count].

    Each trial gets its own page table. With legacy_clock the trials share a
    single evictor, so each one starts its scan where the previous one left
    the hand and results depend on trial order.
    """
    evictor = ClockEvictor() if legacy_clock else None
    return [SweepResult(frames, simulate(trace, frames, page_count, evictor))
            for frames in range(first_frame_count, page_count + 1)]
