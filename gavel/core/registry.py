"""Participant Registry - sets every franchise up with a full purse."""

from typing import Optional, Sequence

from gavel.core.models.participant import Participant, TeamDescriptor


def initialize_participants(
    descriptors: Sequence[TeamDescriptor],
    user_team_id: Optional[str],
    purse: int,
) -> list[Participant]:
    """
    Create one participant per franchise with an empty roster.

    Args:
        descriptors: Franchises taking part
        user_team_id: Team controlled by the human, or None for an all-AI run
        purse: Starting purse for every team

    Raises:
        ValueError: If user_team_id names no franchise
    """
    if user_team_id is not None and all(d.team_id != user_team_id for d in descriptors):
        raise ValueError(f"Unknown team: {user_team_id}")

    return [
        Participant(
            team_id=d.team_id,
            name=d.name,
            purse=purse,
            roster=(),
            is_user=d.team_id == user_team_id,
            branding=d.branding,
        )
        for d in descriptors
    ]
