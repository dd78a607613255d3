"""
API Router for live auction sessions.

Provides endpoints for:
- Creating and cancelling sessions
- Reading auction state and team summaries
- Human bid / pass
- Manual clock control (tick, pause, resume)
"""

from fastapi import APIRouter, HTTPException

from gavel.api.schemas.auction import (
    CreateSessionRequest,
    FranchiseResponse,
    SessionResponse,
    TeamsResponse,
    TickRequest,
)
from gavel.api.services.auction_service import AuctionSession, auction_session_manager
from gavel.core.catalog import CatalogValidationError
from gavel.core.league import FRANCHISES

router = APIRouter(prefix="/auction", tags=["auction"])


def _get_session_or_404(session_id: str) -> AuctionSession:
    session = auction_session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# === League ===

@router.get("/teams", response_model=list[FranchiseResponse])
async def list_franchises():
    """List the default franchises and their bidding personalities."""
    return [
        {
            "team_id": data.team_id,
            "name": data.name,
            "city": data.city,
            "primary_color": data.primary_color,
            "secondary_color": data.secondary_color,
            "personality": data.default_personality.value,
        }
        for data in FRANCHISES.values()
    ]


# === Session Management ===

@router.post("/sessions", response_model=SessionResponse)
async def create_session(request: CreateSessionRequest):
    """
    Create a new auction session.

    Builds the catalog (generated unless one is supplied) and puts the
    first lot on the block. With auto_run the clock runs on its own;
    otherwise advance it with the tick endpoint.
    """
    try:
        session = await auction_session_manager.create_session(
            user_team_id=request.user_team_id,
            seed=request.seed,
            auto_run=request.auto_run,
            num_sets_per_role=request.num_sets_per_role,
            players_per_set=request.players_per_set,
            records=request.catalog,
        )
    except CatalogValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.to_dict()


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    """Get the current auction state."""
    return _get_session_or_404(session_id).to_dict()


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """Cancel a session, stopping its clock and discarding its state."""
    if not await auction_session_manager.remove_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"session_id": session_id, "deleted": True}


@router.get("/sessions/{session_id}/teams", response_model=TeamsResponse)
async def get_teams(session_id: str):
    """Get squad composition and spend for every franchise."""
    session = _get_session_or_404(session_id)
    return {"session_id": session_id, "teams": session.team_summaries()}


# === Bidding ===

@router.post("/sessions/{session_id}/bid", response_model=SessionResponse)
async def submit_bid(session_id: str):
    """
    Raise to the next ladder price for the user's franchise.

    An ineligible bid leaves the state unchanged.
    """
    session = _get_session_or_404(session_id)
    await session.bid()
    return session.to_dict()


@router.post("/sessions/{session_id}/pass", response_model=SessionResponse)
async def submit_pass(session_id: str):
    """Pass on the current lot."""
    session = _get_session_or_404(session_id)
    await session.pass_lot()
    return session.to_dict()


# === Clock Control ===

@router.post("/sessions/{session_id}/tick", response_model=SessionResponse)
async def tick(session_id: str, request: TickRequest):
    """Advance the auction clock by elapsed_ms."""
    session = _get_session_or_404(session_id)
    await session.tick(request.elapsed_ms)
    return session.to_dict()


@router.post("/sessions/{session_id}/pause", response_model=SessionResponse)
async def pause(session_id: str):
    session = _get_session_or_404(session_id)
    await session.pause()
    return session.to_dict()


@router.post("/sessions/{session_id}/resume", response_model=SessionResponse)
async def resume(session_id: str):
    session = _get_session_or_404(session_id)
    await session.resume()
    return session.to_dict()
