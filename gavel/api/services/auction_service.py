"""Service for running live auction sessions."""

import asyncio
import logging
import random
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional, Sequence
from uuid import uuid4

from gavel.core.auction import AuctionEngine, team_summary
from gavel.core.catalog import build_catalog
from gavel.core.config import AuctionConfig, get_config
from gavel.core.league import DEFAULT_PERSONALITIES, default_team_descriptors
from gavel.core.models.state import AuctionState
from gavel.events import EventBus
from gavel.generators import generate_catalog_records
from gavel.logging import AuctionLog

logger = logging.getLogger(__name__)

# Scheduler cadence; the engine keeps its own AI poll cadence on top of this
TICK_INTERVAL_MS = 100


class AuctionSession:
    """
    One auction run: engine, current state and the scheduler driving it.

    Every entry point takes the session lock, so a scheduler tick, an AI
    poll and a human bid never interleave.
    """

    def __init__(
        self,
        session_id: str,
        engine: AuctionEngine,
        state: AuctionState,
        auction_log: AuctionLog,
        auto_run: bool = True,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        self.session_id = session_id
        self.engine = engine
        self.state = state
        self.auction_log = auction_log
        self.auto_run = auto_run
        self.tick_interval_ms = tick_interval_ms
        self.created_at = datetime.now()
        self.error: Optional[str] = None

        self._lock = asyncio.Lock()
        self._is_running = False
        self._tick_task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Check if tick loop is running."""
        return self._is_running

    async def start(self) -> None:
        """Start the tick loop if this session drives its own clock."""
        if self._is_running or not self.auto_run:
            return

        self._is_running = True
        self._tick_task = asyncio.create_task(self._tick_loop())

    async def stop(self) -> None:
        """Stop the tick loop."""
        self._is_running = False
        if self._tick_task:
            self._tick_task.cancel()
            try:
                await self._tick_task
            except asyncio.CancelledError:
                pass
            self._tick_task = None

    async def _tick_loop(self) -> None:
        """Main tick loop - feeds real elapsed time to the engine until complete."""
        last_tick_time = datetime.now()
        tick_interval = self.tick_interval_ms / 1000

        while self._is_running:
            try:
                await asyncio.sleep(tick_interval)

                now = datetime.now()
                elapsed_ms = int((now - last_tick_time).total_seconds() * 1000)
                # Carry the sub-millisecond remainder into the next tick
                last_tick_time += timedelta(milliseconds=elapsed_ms)

                async with self._lock:
                    self.state = self.engine.tick(self.state, elapsed_ms)
                    if self.state.is_complete:
                        logger.info(f"Session {self.session_id} complete")
                        self._is_running = False

            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.exception(f"Error in auction tick loop for session {self.session_id}")
                self.error = str(e)
                self._is_running = False

    # === Actions ===

    async def bid(self) -> AuctionState:
        """Submit a human bid at the next ladder price."""
        async with self._lock:
            self.state = self.engine.submit_human_bid(self.state)
            return self.state

    async def pass_lot(self) -> AuctionState:
        async with self._lock:
            self.state = self.engine.submit_pass(self.state)
            return self.state

    async def tick(self, elapsed_ms: int) -> AuctionState:
        """Advance the clock manually."""
        async with self._lock:
            self.state = self.engine.tick(self.state, elapsed_ms)
            return self.state

    async def pause(self) -> AuctionState:
        async with self._lock:
            self.state = self.engine.pause(self.state)
            return self.state

    async def resume(self) -> AuctionState:
        async with self._lock:
            self.state = self.engine.resume(self.state)
            return self.state

    # === Responses ===

    def team_summaries(self) -> list[dict]:
        """Summaries for every franchise, in league order."""
        summaries = []
        for participant in self.state.participants:
            summary = team_summary(participant).to_dict()
            summary["name"] = participant.name
            summary["is_user"] = participant.is_user
            summary["roster"] = [lot.to_dict() for lot in participant.roster]
            summaries.append(summary)
        return summaries

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "session_id": self.session_id,
            "auto_run": self.auto_run,
            "is_running": self.is_running,
            "error": self.error,
            "state": self.state.to_dict(),
        }


class AuctionSessionManager:
    """Manages active auction sessions."""

    def __init__(self) -> None:
        self._sessions: dict[str, AuctionSession] = {}

    async def create_session(
        self,
        user_team_id: Optional[str],
        seed: Optional[int] = None,
        auto_run: bool = True,
        num_sets_per_role: int = 10,
        players_per_set: int = 6,
        records: Optional[Mapping[str, Sequence[Mapping[str, Any]]]] = None,
        config: Optional[AuctionConfig] = None,
    ) -> AuctionSession:
        """
        Create and start a new auction session.

        Raises:
            CatalogValidationError: If the supplied records are malformed
            ValueError: If user_team_id is not a known franchise
        """
        config = config or get_config()
        rng = random.Random(seed)

        if records is None:
            records = generate_catalog_records(num_sets_per_role, players_per_set, rng=rng)
        lots = build_catalog(records, config)

        event_bus = EventBus()
        auction_log = AuctionLog()
        auction_log.connect_to_event_bus(event_bus)

        engine = AuctionEngine(
            lots,
            default_team_descriptors(),
            config=config,
            rng=rng,
            personalities=DEFAULT_PERSONALITIES,
            event_bus=event_bus,
        )
        state = engine.initialize(user_team_id)

        session = AuctionSession(
            session_id=str(uuid4()),
            engine=engine,
            state=state,
            auction_log=auction_log,
            auto_run=auto_run,
        )
        self._sessions[session.session_id] = session
        await session.start()

        logger.info(
            f"Created auction session {session.session_id}: {len(lots)} lots, "
            f"user team {user_team_id or 'none'}, auto_run={auto_run}"
        )
        return session

    def get_session(self, session_id: str) -> Optional[AuctionSession]:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    async def remove_session(self, session_id: str) -> bool:
        """Remove and stop a session."""
        session = self._sessions.pop(session_id, None)
        if session:
            await session.stop()
            return True
        return False

    @property
    def active_sessions(self) -> list[str]:
        """Get list of active session IDs."""
        return list(self._sessions.keys())

    async def cleanup_all(self) -> None:
        """Stop all sessions."""
        for session in list(self._sessions.values()):
            await session.stop()
        self._sessions.clear()


# Global session manager
auction_session_manager = AuctionSessionManager()
