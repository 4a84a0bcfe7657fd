"""
Feed Controller

Hosts a PlaybackScheduler for one feed screen.

Responsibilities:
- Load the community feed (processed videos) or a profile feed from the catalog
- Wrap records in FeedEntry objects with one player each
- Reuse players across refreshes; release players whose entries disappeared
- Forward scroll-settled geometry and focus changes to the scheduler
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from catalog.constants import CatalogMode
from catalog.interfaces.catalog_interface import CatalogError, CatalogInterface
from catalog.models.video_record import VideoRecord
from config.settings import FEED_PAGE_LIMIT
from playback.controllers.playback_scheduler import PlaybackScheduler, VisibilityReport
from playback.interfaces.player_interface import PlayerInterface
from playback.models.feed_entry import FeedEntry
from playback.models.playback_decision import PlaybackDecision
from playback.models.viewport import Viewport
from playback.utils.visibility import build_visibility_report, paged_layouts

PlayerFactory = Callable[[VideoRecord], PlayerInterface]


class FeedController:
    """
    Feed screen coordinator.

    Usage:
        feed = FeedController(catalog, player_factory=MockPlayer.for_record,
                              item_length=800)

        feed.load_community_feed()
        feed.on_scroll_settled(Viewport(offset=0, height=800))  # entry 0 plays

        feed.set_focus(False)  # screen hidden, entry 0 paused
        feed.release()         # screen closed, players freed
    """

    def __init__(
        self,
        catalog: CatalogInterface,
        player_factory: PlayerFactory,
        scheduler: Optional[PlaybackScheduler] = None,
        item_length: float = 1.0,
        page_limit: int = FEED_PAGE_LIMIT,
    ):
        """
        Initialize feed controller.

        Args:
            catalog: Catalog providing the records
            player_factory: Creates a player for a record
            scheduler: PlaybackScheduler (default: new one)
            item_length: Screen length of one full-screen entry
            page_limit: Maximum records per load
        """
        self.logger = logging.getLogger(__name__)

        self.catalog = catalog
        self.player_factory = player_factory
        self.scheduler = scheduler or PlaybackScheduler()
        self.item_length = item_length
        self.page_limit = page_limit

        self.mode: Optional[CatalogMode] = None
        self.owner_id: Optional[str] = None
        self._entries: List[FeedEntry] = []

        self.logger.info("Feed Controller initialized")

    # =========================================================================
    # LOADING
    # =========================================================================

    def load_community_feed(self) -> List[FeedEntry]:
        """Load every processed video, newest first"""
        self.mode = CatalogMode.COMMUNITY
        self.owner_id = None
        return self.refresh()

    def load_profile_feed(self, owner_id: str) -> List[FeedEntry]:
        """Load one user's videos (processed or not), newest first"""
        self.mode = CatalogMode.PROFILE
        self.owner_id = owner_id
        return self.refresh()

    def refresh(self) -> List[FeedEntry]:
        """
        Reload the current feed from the catalog.

        On a catalog error the current entries are kept.
        """
        if self.mode is None:
            self.logger.warning("Refresh requested before a feed was loaded")
            return self.entries

        try:
            if self.mode == CatalogMode.COMMUNITY:
                records = self.catalog.list_processed(limit=self.page_limit)
            else:
                records = self.catalog.list_by_owner(
                    self.owner_id,
                    limit=self.page_limit,
                )
        except CatalogError as e:
            self.logger.error(f"❌ Failed to load {self.mode.value} feed: {e}")
            return self.entries

        self._replace_entries(records)
        self.logger.info(
            f"Loaded {self.mode.value} feed: {len(self._entries)} videos",
        )
        return self.entries

    def _replace_entries(self, records: List[VideoRecord]) -> None:
        players = {e.video_id: e.player for e in self._entries}

        new_entries = []
        for i, record in enumerate(records):
            player = players.pop(record.video_id, None)
            if player is None:
                player = self._create_player(record)
            new_entries.append(FeedEntry(record=record, index=i, player=player))

        # Scheduler pauses vanished owners before their players are freed
        self.scheduler.set_entries(new_entries)
        self._entries = new_entries

        for video_id, player in players.items():
            self._release_player(video_id, player)

    def _create_player(self, record: VideoRecord) -> Optional[PlayerInterface]:
        try:
            return self.player_factory(record)
        except Exception as e:
            self.logger.error(
                f"Cannot create player for {record.video_id}: {e}",
                exc_info=True,
            )
            return None

    def _release_player(
        self,
        video_id: str,
        player: Optional[PlayerInterface],
    ) -> None:
        if player is None:
            return
        try:
            player.release()
            self.logger.debug(f"Released player for {video_id}")
        except Exception as e:
            self.logger.error(f"Error releasing player for {video_id}: {e}")

    # =========================================================================
    # EVENTS
    # =========================================================================

    def on_scroll_settled(self, viewport: Viewport) -> PlaybackDecision:
        """Turn scroll geometry into a visibility report"""
        layouts = paged_layouts(len(self._entries), self.item_length)
        report = build_visibility_report(viewport, layouts)
        return self.scheduler.apply_visibility(report)

    def on_visibility_report(self, report: VisibilityReport) -> PlaybackDecision:
        return self.scheduler.apply_visibility(report)

    def set_focus(self, focus: bool) -> PlaybackDecision:
        return self.scheduler.set_focus(focus)

    def release(self) -> None:
        """Stop playback and free every player (screen closed)"""
        entries = self._entries
        self.scheduler.set_entries([])
        self._entries = []

        for entry in entries:
            self._release_player(entry.video_id, entry.player)

        self.logger.info(f"Feed released ({len(entries)} players)")

    # =========================================================================
    # STATUS
    # =========================================================================

    @property
    def entries(self) -> List[FeedEntry]:
        return list(self._entries)

    @property
    def active_entry(self) -> Optional[FeedEntry]:
        return self.scheduler.active_entry

    def get_status(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value if self.mode else None,
            "owner_id": self.owner_id,
            "entries": len(self._entries),
            "scheduler": self.scheduler.get_status(),
        }
