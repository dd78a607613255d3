"""Tests for the lot-by-lot auction state machine."""

import logging
import random
from dataclasses import replace
from datetime import datetime

import pytest

from gavel.core.ai.personality import Personality
from gavel.core.auction import (
    AuctionEngine,
    AuctionInvariantError,
    is_complete,
    team_summary,
)
from gavel.core.catalog import build_catalog
from gavel.core.enums import AuctionPhase, LotStatus, Role
from gavel.core.league import DEFAULT_PERSONALITIES, default_team_descriptors
from gavel.core.models import Participant
from gavel.events import (
    AuctionCompleteEvent,
    BidPlacedEvent,
    LotOpenedEvent,
    LotSoldEvent,
    LotUnsoldEvent,
)
from gavel.generators import generate_catalog_records


# =============================================================================
# Helpers
# =============================================================================


def _with_participants(state, *participants):
    """Swap in replacement participants by team ID."""
    updates = {p.team_id: p for p in participants}
    return replace(state, participants=tuple(updates.get(p.team_id, p) for p in state.participants))


def _assert_lot_counts(state):
    on_block = 1 if state.phase == AuctionPhase.ACTIVE else 0
    assert len(state.sold) + len(state.unsold) + len(state.queue) + on_block == state.catalog_size


def _assert_safety(state, config):
    for participant in state.participants:
        assert participant.purse >= 0
        assert participant.roster_size <= config.max_roster_size
        assert participant.overseas_count <= config.max_overseas


@pytest.fixture
def lots(raw_catalog, config):
    return build_catalog(raw_catalog, config)


@pytest.fixture
def engine(lots, teams, config, rng, event_bus) -> AuctionEngine:
    return AuctionEngine(lots, teams, config=config, rng=rng, event_bus=event_bus)


@pytest.fixture
def quiet_engine(lots, teams, quiet_config, rng) -> AuctionEngine:
    """Engine whose AI never polls."""
    return AuctionEngine(lots, teams, config=quiet_config, rng=rng)


@pytest.fixture
def eager_config(config):
    """Rules where every AI poll fires."""
    return replace(config, ai_poll_chance=1.0)


# =============================================================================
# Initialization
# =============================================================================


class TestInitialize:
    """Tests for the opening state."""

    def test_first_lot_on_block(self, engine, lots):
        state = engine.initialize("CHE")

        assert state.phase == AuctionPhase.ACTIVE
        assert state.current_lot.name == lots[0].name
        assert state.current_lot.status == LotStatus.ACTIVE
        assert state.current_price == 200
        assert state.leader_id is None
        assert state.time_remaining_ms == 5000
        assert len(state.queue) == len(lots) - 1
        assert state.catalog_size == len(lots)
        assert state.lot_number == 1
        _assert_lot_counts(state)

    def test_participants(self, engine):
        state = engine.initialize("CHE")

        assert [p.team_id for p in state.participants] == ["CHE", "MUM", "KOL"]
        assert all(p.purse == 12000 and p.roster == () for p in state.participants)
        assert state.user_participant.team_id == "CHE"
        assert state.user_participant.is_user
        assert not state.participant("MUM").is_user

    def test_branding_passed_through(self, engine):
        state = engine.initialize("CHE")
        assert state.participant("MUM").branding == {"primary_color": "#004BA0"}

    def test_all_ai_run(self, engine):
        state = engine.initialize(None)
        assert state.user_participant is None
        assert not any(p.is_user for p in state.participants)

    def test_unknown_user_team(self, engine):
        with pytest.raises(ValueError, match="Unknown team"):
            engine.initialize("XYZ")

    def test_empty_catalog_is_complete(self, teams, config):
        engine = AuctionEngine([], teams, config=config)
        state = engine.initialize("CHE")

        assert state.is_complete
        assert is_complete(state)
        assert engine.is_complete(state)
        assert state.current_lot is None
        assert state.catalog_size == 0


# =============================================================================
# Human Bidding
# =============================================================================


class TestHumanBid:
    """Tests for submit_human_bid and submit_pass."""

    def test_bid_raises_to_next_price(self, quiet_engine):
        state = quiet_engine.initialize("CHE")
        state = quiet_engine.tick(state, 1000)
        assert state.time_remaining_ms == 4000

        state = quiet_engine.submit_human_bid(state)

        assert state.current_price == 225
        assert state.leader_id == "CHE"
        assert state.time_remaining_ms == 5000

    def test_bid_while_leading_is_noop(self, quiet_engine):
        state = quiet_engine.submit_human_bid(quiet_engine.initialize("CHE"))

        again = quiet_engine.submit_human_bid(state)

        assert again is state
        assert again.current_price == 225
        assert again.leader_id == "CHE"

    def test_bid_without_user_team(self, quiet_engine):
        state = quiet_engine.initialize(None)
        assert quiet_engine.submit_human_bid(state) is state

    def test_bid_while_paused(self, quiet_engine):
        state = quiet_engine.pause(quiet_engine.initialize("CHE"))
        assert quiet_engine.submit_human_bid(state) is state

    def test_bid_while_settling(self, quiet_engine):
        state = quiet_engine.submit_human_bid(quiet_engine.initialize("CHE"))
        state = quiet_engine.tick(state, 5000)
        assert state.phase == AuctionPhase.SETTLING

        assert quiet_engine.submit_human_bid(state) is state

    def test_bid_beyond_purse(self, quiet_engine, make_roster):
        state = quiet_engine.initialize("CHE")
        user = replace(state.user_participant, purse=210, roster=make_roster({Role.AR: 17}))
        state = _with_participants(state, user)

        assert quiet_engine.submit_human_bid(state) is state

    def test_bid_with_full_squad(self, quiet_engine, make_roster):
        state = quiet_engine.initialize("CHE")
        user = replace(state.user_participant, roster=make_roster({Role.AR: 25}))
        state = _with_participants(state, user)

        assert quiet_engine.submit_human_bid(state) is state

    def test_overseas_cap_blocks_human(self, teams, quiet_config, make_lot, make_roster):
        engine = AuctionEngine([make_lot(is_overseas=True)], teams, config=quiet_config)
        state = engine.initialize("CHE")
        user = replace(state.user_participant, roster=make_roster({Role.BOWL: 8}, overseas=8))
        state = _with_participants(state, user)

        assert engine.submit_human_bid(state) is state

    def test_pass_is_noop(self, quiet_engine):
        state = quiet_engine.initialize("CHE")
        assert quiet_engine.submit_pass(state) is state


# =============================================================================
# Clock and Resolution
# =============================================================================


class TestTick:
    """Tests for tick-driven countdown and resolution."""

    def test_countdown(self, quiet_engine):
        state = quiet_engine.tick(quiet_engine.initialize("CHE"), 1500)
        assert state.time_remaining_ms == 3500
        assert state.phase == AuctionPhase.ACTIVE

    def test_zero_elapsed_is_noop(self, quiet_engine):
        state = quiet_engine.initialize("CHE")
        assert quiet_engine.tick(state, 0) is state

    def test_unsold_advances_immediately(self, quiet_engine, lots):
        state = quiet_engine.tick(quiet_engine.initialize("CHE"), 5000)

        assert state.phase == AuctionPhase.ACTIVE
        assert [lot.name for lot in state.unsold] == [lots[0].name]
        assert state.unsold[0].status == LotStatus.UNSOLD
        assert state.current_lot.name == lots[1].name
        assert state.current_price == lots[1].base_price
        assert state.log[-1].buyer_id is None
        assert not state.log[-1].is_sale
        _assert_lot_counts(state)

    def test_sale_after_settle_delay(self, quiet_engine, lots):
        """Countdown expiry with a leader debits the purse and adds one lot."""
        state = quiet_engine.submit_human_bid(quiet_engine.initialize("CHE"))
        price = state.current_price

        state = quiet_engine.tick(state, 5000)
        assert state.phase == AuctionPhase.SETTLING
        assert state.current_lot.status == LotStatus.SOLD
        _assert_lot_counts(state)

        state = quiet_engine.tick(state, 1999)
        assert state.phase == AuctionPhase.SETTLING
        assert state.settle_remaining_ms == 1

        state = quiet_engine.tick(state, 1)
        assert state.phase == AuctionPhase.ACTIVE
        assert state.current_lot.name == lots[1].name

        user = state.user_participant
        assert user.purse == 12000 - price
        assert user.roster_size == 1
        assert user.roster[0].sold_price == price
        assert user.roster[0].buyer_id == "CHE"
        assert state.sold[0].name == lots[0].name
        assert state.log[0].is_sale
        assert state.log[0].price == price

    def test_all_ineligible_single_lot(self, teams, eager_config, make_lot, make_roster):
        """Nobody can bid: the lot goes unsold and the auction completes."""
        engine = AuctionEngine([make_lot()], teams, config=eager_config, rng=random.Random(1))
        state = engine.initialize("CHE")
        full = [replace(p, roster=make_roster({Role.AR: 25}, team_id=p.team_id)) for p in state.participants]
        state = _with_participants(state, *full)

        state = engine.tick(state, 5000)

        assert state.phase == AuctionPhase.COMPLETE
        assert len(state.unsold) == 1
        assert len(state.sold) == 0
        assert state.current_lot is None

    def test_sale_with_zero_settle_delay(self, lots, teams, quiet_config):
        engine = AuctionEngine(lots, teams, config=replace(quiet_config, settle_delay_ms=0))
        state = engine.submit_human_bid(engine.initialize("CHE"))

        state = engine.tick(state, 5000)

        assert state.phase == AuctionPhase.ACTIVE
        assert len(state.sold) == 1

    def test_last_lot_completes(self, teams, quiet_config, make_lot):
        engine = AuctionEngine([make_lot()], teams, config=quiet_config)
        state = engine.submit_human_bid(engine.initialize("CHE"))

        state = engine.tick(engine.tick(state, 5000), 2000)

        assert state.is_complete
        assert state.queue == ()
        assert len(state.sold) == 1

    def test_log_uses_injected_clock(self, lots, teams, quiet_config):
        moment = datetime(2025, 3, 21, 19, 30)
        engine = AuctionEngine(lots, teams, config=quiet_config, clock=lambda: moment)

        state = engine.tick(engine.initialize("CHE"), 5000)

        assert state.log[0].timestamp == moment


class TestAIPolling:
    """Tests for the coarse AI polling cadence."""

    def test_no_poll_before_interval(self, lots, teams, eager_config):
        engine = AuctionEngine(lots, teams, config=eager_config, rng=random.Random(2))
        state = engine.tick(engine.initialize("CHE"), 500)

        assert state.leader_id is None
        assert state.ai_poll_elapsed_ms == 500

    def test_poll_bid_resets_countdown_and_ends_tick(self, lots, teams, eager_config):
        engine = AuctionEngine(lots, teams, config=eager_config, rng=random.Random(2))
        state = engine.tick(engine.initialize("CHE"), 500)

        state = engine.tick(state, 300)

        assert state.leader_id in ("MUM", "KOL")
        assert state.current_price == 225
        assert state.time_remaining_ms == 5000

    def test_poll_bid_prevents_expiry_in_same_tick(self, lots, teams, eager_config):
        engine = AuctionEngine(lots, teams, config=eager_config, rng=random.Random(2))

        state = engine.tick(engine.initialize("CHE"), 5000)

        assert state.phase == AuctionPhase.ACTIVE
        assert state.leader_id is not None
        assert state.sold == ()
        assert state.unsold == ()

    def test_poll_ai_skips_user(self, lots, teams, eager_config):
        engine = AuctionEngine(lots, teams, config=eager_config, rng=random.Random(4))
        state = engine.initialize("CHE")

        for _ in range(20):
            state = engine.poll_ai(state)
            assert state.leader_id != "CHE"

    def test_poll_ai_while_settling(self, quiet_engine):
        state = quiet_engine.tick(quiet_engine.submit_human_bid(quiet_engine.initialize("CHE")), 5000)
        assert quiet_engine.poll_ai(state) is state

    def test_personalities_drive_max_bid(self, lots, teams, eager_config):
        """Only aggressive teams keep bidding far past a balanced valuation."""
        personalities = {"MUM": Personality.AGGRESSIVE, "KOL": Personality.CONSERVATIVE}
        engine = AuctionEngine(lots, teams, config=eager_config, rng=random.Random(9),
                               personalities=personalities)
        state = engine.initialize(None)
        # Next price 625: above a conservative max (575), well inside an aggressive one (997)
        state = replace(state, current_price=600, leader_id="CHE")

        state = engine.poll_ai(state)

        assert state.leader_id == "MUM"


class TestPause:
    """Tests for pause and resume."""

    def test_pause_freezes_countdown(self, quiet_engine):
        state = quiet_engine.tick(quiet_engine.initialize("CHE"), 1000)
        state = quiet_engine.pause(state)

        frozen = quiet_engine.tick(state, 3000)

        assert frozen is state
        assert frozen.time_remaining_ms == 4000

    def test_resume_continues(self, quiet_engine):
        state = quiet_engine.pause(quiet_engine.tick(quiet_engine.initialize("CHE"), 1000))
        state = quiet_engine.resume(state)

        state = quiet_engine.tick(state, 1000)

        assert not state.paused
        assert state.time_remaining_ms == 3000

    def test_pause_freezes_settle_delay(self, quiet_engine):
        state = quiet_engine.tick(quiet_engine.submit_human_bid(quiet_engine.initialize("CHE")), 5000)
        state = quiet_engine.pause(state)

        assert quiet_engine.tick(state, 5000).phase == AuctionPhase.SETTLING

    def test_pause_and_resume_are_idempotent(self, quiet_engine):
        state = quiet_engine.initialize("CHE")
        paused = quiet_engine.pause(state)

        assert quiet_engine.pause(paused) is paused
        assert quiet_engine.resume(state) is state


class TestSaleInvariants:
    """Tests for the guards applied when a lot is sold."""

    def _overdrawn_state(self, engine):
        state = engine.initialize(None)
        state = replace(state, leader_id="MUM", current_price=225)
        return _with_participants(state, replace(state.participant("MUM"), purse=100))

    def test_strict_raises(self, lots, teams, quiet_config):
        engine = AuctionEngine(lots, teams, config=quiet_config)
        state = self._overdrawn_state(engine)

        with pytest.raises(AuctionInvariantError, match="exceeds purse"):
            engine.tick(state, 5000)

    def test_lenient_resolves_unsold(self, lots, teams, quiet_config, caplog):
        engine = AuctionEngine(lots, teams, config=replace(quiet_config, strict_invariants=False))
        state = self._overdrawn_state(engine)

        with caplog.at_level(logging.ERROR, logger="gavel.core.auction.engine"):
            state = engine.tick(state, 5000)

        assert len(state.unsold) == 1
        assert state.participant("MUM").purse == 100
        assert state.participant("MUM").roster == ()
        assert "Rejected sale" in caplog.text

    def test_overseas_cap_guard(self, teams, quiet_config, make_lot, make_roster):
        engine = AuctionEngine([make_lot(is_overseas=True)], teams, config=quiet_config)
        state = engine.initialize(None)
        mum = replace(state.participant("MUM"), roster=make_roster({Role.BOWL: 8}, team_id="MUM", overseas=8))
        state = replace(_with_participants(state, mum), leader_id="MUM", current_price=55)

        with pytest.raises(AuctionInvariantError, match="overseas cap"):
            engine.tick(state, 5000)


# =============================================================================
# Full Runs
# =============================================================================


class TestFullRun:
    """Tests over complete automated auctions."""

    @pytest.fixture
    def league_engine(self, config):
        rng = random.Random(2024)
        records = generate_catalog_records(sets_per_role=2, players_per_set=5, rng=rng)
        return AuctionEngine(
            build_catalog(records, config),
            default_team_descriptors(),
            config=config,
            rng=rng,
            personalities=DEFAULT_PERSONALITIES,
        )

    def test_run_to_completion(self, league_engine):
        state = league_engine.run_to_completion(league_engine.initialize(None))

        assert state.is_complete
        assert len(state.sold) + len(state.unsold) == state.catalog_size
        assert len(state.log) == state.catalog_size
        assert all(lot.is_resolved for lot in state.sold + state.unsold)

    def test_purse_conservation(self, league_engine, config):
        state = league_engine.run_to_completion(league_engine.initialize(None))

        spent = sum(config.initial_purse - p.purse for p in state.participants)
        assert spent == sum(lot.sold_price for lot in state.sold)
        assert spent == sum(entry.price for entry in state.log)

    def test_invariants_hold_every_tick(self, league_engine, config):
        state = league_engine.initialize(None)
        previous_price = state.current_price
        previous_lot = state.current_lot.lot_id

        while not state.is_complete:
            state = league_engine.tick(state, 200)
            _assert_safety(state, config)
            _assert_lot_counts(state)
            if state.phase == AuctionPhase.ACTIVE:
                if state.current_lot.lot_id == previous_lot:
                    assert state.current_price >= previous_price
                previous_lot = state.current_lot.lot_id
                previous_price = state.current_price

    def test_rosters_match_sold_lots(self, league_engine):
        state = league_engine.run_to_completion(league_engine.initialize(None))

        rostered = sorted(lot.lot_id for p in state.participants for lot in p.roster)
        assert rostered == sorted(lot.lot_id for lot in state.sold)
        for participant in state.participants:
            assert all(lot.buyer_id == participant.team_id for lot in participant.roster)

    def test_same_seed_replays_exactly(self, config):
        def run(seed):
            rng = random.Random(seed)
            lots = build_catalog(generate_catalog_records(2, 4, rng=rng), config)
            engine = AuctionEngine(lots, default_team_descriptors(), config=config, rng=rng,
                                   personalities=DEFAULT_PERSONALITIES)
            state = engine.run_to_completion(engine.initialize("CHE"))
            return [(e.lot_name, e.buyer_id, e.price) for e in state.log]

        assert run(77) == run(77)

    def test_max_steps(self, engine):
        with pytest.raises(RuntimeError, match="not complete"):
            engine.run_to_completion(engine.initialize("CHE"), max_steps=3)

    def test_run_resumes_paused_state(self, quiet_engine):
        state = quiet_engine.pause(quiet_engine.initialize("CHE"))
        assert quiet_engine.run_to_completion(state).is_complete


class TestEvents:
    """Tests for events emitted on the bus."""

    def test_one_resolution_event_per_lot(self, engine, event_bus, lots):
        received = []
        event_bus.subscribe_all(received.append)

        engine.run_to_completion(engine.initialize("CHE"))

        opened = [e for e in received if isinstance(e, LotOpenedEvent)]
        resolved = [e for e in received if isinstance(e, (LotSoldEvent, LotUnsoldEvent))]
        complete = [e for e in received if isinstance(e, AuctionCompleteEvent)]

        assert len(opened) == len(lots)
        assert len(resolved) == len(lots)
        assert len(complete) == 1
        assert complete[0].sold_count + complete[0].unsold_count == len(lots)

    def test_bid_event(self, lots, teams, quiet_config, event_bus):
        engine = AuctionEngine(lots, teams, config=quiet_config, event_bus=event_bus)
        bids = []
        event_bus.subscribe(BidPlacedEvent, bids.append)

        engine.submit_human_bid(engine.initialize("CHE"))

        assert len(bids) == 1
        assert bids[0].team_id == "CHE"
        assert bids[0].amount == 225
        assert bids[0].is_user
        assert bids[0].lot_number == 1
        assert bids[0].catalog_size == len(lots)

    def test_lot_numbers(self, lots, teams, quiet_config, event_bus):
        engine = AuctionEngine(lots, teams, config=quiet_config, event_bus=event_bus)
        received = []
        event_bus.subscribe(LotUnsoldEvent, received.append)
        event_bus.subscribe(LotOpenedEvent, received.append)

        engine.tick(engine.initialize("CHE"), 5000)

        assert [(type(e), e.lot_number) for e in received] == [
            (LotOpenedEvent, 1),
            (LotUnsoldEvent, 1),
            (LotOpenedEvent, 2),
        ]

    def test_sold_event(self, lots, teams, quiet_config, event_bus):
        engine = AuctionEngine(lots, teams, config=quiet_config, event_bus=event_bus)
        sold = []
        event_bus.subscribe(LotSoldEvent, sold.append)

        engine.tick(engine.submit_human_bid(engine.initialize("CHE")), 5000)

        assert len(sold) == 1
        assert sold[0].buyer_id == "CHE"
        assert sold[0].price == 225
        assert sold[0].lot.status == LotStatus.SOLD


class TestTeamSummary:
    """Tests for team_summary."""

    def test_summary_after_sale(self, quiet_engine):
        state = quiet_engine.tick(quiet_engine.submit_human_bid(quiet_engine.initialize("CHE")), 5000)

        summary = team_summary(state.user_participant)

        assert summary.roster_size == 1
        assert summary.total_spent == 225
        assert summary.purse_remaining == 11775
        assert summary.role_counts[Role.BAT] == 1
        assert summary.role_counts[Role.BOWL] == 0
        assert summary.overseas_count == 0

    def test_summary_dict(self, make_roster):
        participant = Participant("CHE", "Chennai Super Kings", 11000,
                                  roster=make_roster({Role.WK: 2}, overseas=1))

        data = team_summary(participant).to_dict()

        assert data["role_counts"] == {"BAT": 0, "WK": 2, "AR": 0, "BOWL": 0}
        assert data["overseas_count"] == 1
        assert data["total_spent"] == 100
