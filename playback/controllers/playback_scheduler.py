"""
Playback Scheduler

Single source of truth for which feed entry, if any, may play.

Decision algorithm (re-run on every visibility report):
1. Candidates = entries with visible_fraction >= threshold
2. No candidate -> nothing active, previous owner paused
3. Otherwise the largest visible_fraction wins; exact ties go to the
   lowest index
4. The winner is "designated". It plays only while the screen has focus;
   every other entry is paused
5. Focus lost -> designated entry paused but kept; focus regained with no
   new report -> same entry plays again without recomputing
6. set_entries() (catalog refresh) -> recompute immediately. Reports are
   positional: after an insert at the top, the entry now at the on-screen
   index is the candidate, not the entry that used to be there

Handoff is strictly sequenced: the old owner is paused before the new
owner is told to play. The scheduler never raises; bad input is clamped
or ignored and player failures are logged.
"""

import logging
import math
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from config.settings import VISIBILITY_THRESHOLD
from core.errors import SchedulerInvariantViolation
from playback.constants import PlaybackCommand
from playback.models.feed_entry import FeedEntry
from playback.models.playback_decision import PlaybackDecision, PlayerCommand
from playback.models.viewport import ViewportState

VisibilityReport = Union[Mapping[int, float], Iterable[Tuple[int, float]]]


class PlaybackScheduler:
    """
    Enforces single-active-player semantics across a scrolling feed.

    Usage:
        scheduler = PlaybackScheduler()
        scheduler.set_entries(entries)

        decision = scheduler.apply_visibility({0: 0.8, 1: 0.3})
        # entry 0 designated and playing, entry 1 paused

        scheduler.set_focus(False)  # entry 0 paused, still designated
        scheduler.set_focus(True)   # entry 0 plays again
    """

    def __init__(self, threshold: float = VISIBILITY_THRESHOLD, focus: bool = True):
        """
        Initialize scheduler.

        Args:
            threshold: Minimum visible fraction for playback eligibility
            focus: Initial screen focus
        """
        self.logger = logging.getLogger(__name__)

        if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
            self.logger.warning(
                f"Invalid visibility threshold {threshold}, "
                f"using {VISIBILITY_THRESHOLD}",
            )
            threshold = VISIBILITY_THRESHOLD

        self.threshold = threshold

        self._lock = threading.RLock()
        self._entries: List[FeedEntry] = []
        self._report: Dict[int, float] = {}
        self._focus = bool(focus)
        self._designated: Optional[FeedEntry] = None
        self._owner: Optional[FeedEntry] = None  # Entry last told to play

        self.logger.info(f"Playback Scheduler initialized (threshold: {threshold})")

    # =========================================================================
    # INPUTS
    # =========================================================================

    def set_entries(self, entries: Iterable[FeedEntry]) -> PlaybackDecision:
        """
        Replace the ordered entry list (catalog refresh).

        Entries are re-indexed by position. The last visibility report is
        keyed by screen position, so it applies to whichever entry now sits
        at each index; positions past the end of the new list are dropped.
        Entries that disappeared are paused if they were playing and are
        never referenced again.
        """
        with self._lock:
            decision = PlaybackDecision()
            try:
                new_entries = list(entries)
                keep_ids = {e.video_id for e in new_entries}

                # Stop an owner that is gone or replaced by a new object
                owner = self._owner
                if owner is not None and not any(e is owner for e in new_entries):
                    replacement = next(
                        (e for e in new_entries if e.video_id == owner.video_id),
                        None,
                    )
                    if (
                        replacement is not None
                        and replacement.player is not None
                        and replacement.player is owner.player
                    ):
                        replacement.is_active = owner.is_active
                        self._owner = replacement
                    else:
                        self._send(owner, PlaybackCommand.PAUSE, decision)
                        self._owner = None
                    owner.is_active = False

                removed = [
                    e.video_id for e in self._entries if e.video_id not in keep_ids
                ]
                if removed:
                    self.logger.debug(f"Entries removed on refresh: {removed}")

                self._entries = new_entries
                self._report = {
                    i: fraction
                    for i, fraction in self._report.items()
                    if i < len(new_entries)
                }
                for i, entry in enumerate(self._entries):
                    entry.index = i
                    entry.visible_fraction = self._report.get(i, 0.0)
                    if entry is not self._owner:
                        entry.is_active = False

                self.logger.info(f"Feed entries set: {len(self._entries)}")

                decision.commands.extend(self._recompute().commands)
                self._verify()
            except SchedulerInvariantViolation as e:
                self._degrade(e, decision)

            return self._finish(decision)

    def apply_visibility(self, report: VisibilityReport) -> PlaybackDecision:
        """
        Apply a settled visibility report and recompute.

        Args:
            report: {index: fraction} or (index, fraction) pairs; indexes not
                listed are treated as invisible. Out-of-range indexes and
                NaN fractions are ignored, other fractions clamped to [0, 1].
        """
        with self._lock:
            self._report = self._sanitize(report)

            for entry in self._entries:
                entry.visible_fraction = self._report.get(entry.index, 0.0)

            return self.recompute()

    def set_focus(self, focus: bool) -> PlaybackDecision:
        """
        Screen focus changed.

        Never recomputes the designation: losing focus pauses the designated
        entry, regaining it resumes the same entry.
        """
        with self._lock:
            focus = bool(focus)
            decision = PlaybackDecision()

            if focus == self._focus:
                return self._finish(decision)

            self._focus = focus
            self.logger.info(f"Focus {'gained' if focus else 'lost'}")

            try:
                self._handoff(self._designated, decision, pause_others=False)
                self._verify()
            except SchedulerInvariantViolation as e:
                self._degrade(e, decision)

            return self._finish(decision)

    def recompute(self) -> PlaybackDecision:
        """Re-run the decision algorithm on the current entries and report"""
        with self._lock:
            try:
                decision = self._recompute()
                self._verify()
            except SchedulerInvariantViolation as e:
                decision = PlaybackDecision()
                self._degrade(e, decision)

            return self._finish(decision)

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def entries(self) -> List[FeedEntry]:
        return list(self._entries)

    @property
    def designated(self) -> Optional[FeedEntry]:
        return self._designated

    @property
    def active_entry(self) -> Optional[FeedEntry]:
        return next((e for e in self._entries if e.is_active), None)

    @property
    def focus(self) -> bool:
        return self._focus

    @property
    def viewport_state(self) -> ViewportState:
        return ViewportState(focus=self._focus, report=dict(self._report))

    def get_status(self) -> Dict[str, Any]:
        """
        Get current scheduler status.

        Returns:
            Dictionary with status information
        """
        designated = self._designated
        active = self.active_entry
        return {
            "entries": len(self._entries),
            "focus": self._focus,
            "threshold": self.threshold,
            "designated_index": designated.index if designated else None,
            "designated_video_id": designated.video_id if designated else None,
            "active_index": active.index if active else None,
            "report": dict(self._report),
        }

    # =========================================================================
    # DECISION
    # =========================================================================

    def _recompute(self) -> PlaybackDecision:
        decision = PlaybackDecision()

        candidates = [
            e for e in self._entries if e.visible_fraction >= self.threshold
        ]

        chosen = None
        if candidates:
            # Largest fraction first, lowest index on exact ties
            chosen = min(candidates, key=lambda e: (-e.visible_fraction, e.index))

        if chosen is not self._designated:
            if chosen is None:
                self.logger.debug("No entry above threshold, nothing designated")
            else:
                self.logger.debug(
                    f"Designated entry {chosen.index} ({chosen.video_id}, "
                    f"{chosen.visible_fraction:.2f} visible)",
                )

        self._handoff(chosen, decision, pause_others=True)
        return decision

    def _handoff(
        self,
        designated: Optional[FeedEntry],
        decision: PlaybackDecision,
        pause_others: bool,
    ) -> None:
        """Pause the old owner, then play the new one (if focused)"""
        self._designated = designated
        target = designated if self._focus else None
        previous = self._owner

        if previous is not None and previous is not target:
            self._send(previous, PlaybackCommand.PAUSE, decision)
            previous.is_active = False
            self._owner = None

        if pause_others:
            for entry in self._entries:
                if entry is not target and entry is not previous:
                    self._send(entry, PlaybackCommand.PAUSE, decision)
                    entry.is_active = False

        if target is not None and target is not previous:
            self._owner = target
            target.is_active = self._send(target, PlaybackCommand.PLAY, decision)

    def _send(
        self,
        entry: FeedEntry,
        command: PlaybackCommand,
        decision: PlaybackDecision,
    ) -> bool:
        """Deliver one command; player failures are logged, never raised"""
        decision.commands.append(
            PlayerCommand(index=entry.index, video_id=entry.video_id, command=command),
        )

        if entry.player is None:
            return True

        try:
            if command == PlaybackCommand.PLAY:
                entry.player.play()
            else:
                entry.player.pause()
            return True
        except Exception as e:
            self.logger.error(
                f"Player {command.value} failed for entry {entry.index} "
                f"({entry.video_id}): {e}",
                exc_info=True,
            )
            return False

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _sanitize(self, report: VisibilityReport) -> Dict[int, float]:
        pairs = report.items() if isinstance(report, Mapping) else report
        count = len(self._entries)

        clean: Dict[int, float] = {}
        for pair in pairs:
            try:
                index, fraction = pair
                index = int(index)
                fraction = float(fraction)
            except (TypeError, ValueError):
                self.logger.warning(f"Ignoring malformed visibility item: {pair!r}")
                continue

            if not 0 <= index < count:
                self.logger.warning(
                    f"Ignoring visibility for out-of-range index {index} "
                    f"({count} entries)",
                )
                continue

            if math.isnan(fraction):
                self.logger.warning(f"Ignoring NaN visibility for index {index}")
                continue

            clean[index] = self._clamp(fraction)

        return clean

    @staticmethod
    def _clamp(fraction: float) -> float:
        if math.isnan(fraction):
            return 0.0
        return min(1.0, max(0.0, fraction))

    def _verify(self) -> None:
        active = [e for e in self._entries if e.is_active]
        if len(active) > 1:
            raise SchedulerInvariantViolation(
                f"{len(active)} active entries: {[e.index for e in active]}",
            )

        if self._designated is not None and not any(
            e is self._designated for e in self._entries
        ):
            raise SchedulerInvariantViolation(
                f"Designated entry {self._designated.video_id} is not in the feed",
            )

    def _degrade(
        self,
        error: SchedulerInvariantViolation,
        decision: PlaybackDecision,
    ) -> None:
        """Fall back to nothing active"""
        self.logger.error(f"Scheduler invariant violated: {error}")

        for entry in self._entries:
            if entry.is_active or entry is self._owner:
                self._send(entry, PlaybackCommand.PAUSE, decision)
            entry.is_active = False

        self._designated = None
        self._owner = None

    def _finish(self, decision: PlaybackDecision) -> PlaybackDecision:
        designated = self._designated
        active = self.active_entry
        decision.designated_index = designated.index if designated else None
        decision.active_index = active.index if active else None
        return decision
