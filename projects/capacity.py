# projects/capacity.py
"""
Team capacity projection for a project.

    filled_team      = members holding a place (invited or accepted)
    total_role_slots = sum of open slots across roles
    remaining_team   = total_team - filled_team - total_role_slots

remaining_team is never persisted negative: stage 4 rejects any allocation
that would exceed total_team, and accept/invite move a slot into a member
instead of adding to the total.
"""
from dataclasses import dataclass
from typing import Iterable

from .models import ProjectMember


@dataclass(frozen=True)
class TeamCapacity:
    total_team: int
    filled_team: int
    total_role_slots: int

    @property
    def remaining_team(self) -> int:
        return self.total_team - self.filled_team - self.total_role_slots

    @property
    def allocated(self) -> int:
        return self.filled_team + self.total_role_slots

    def as_dict(self) -> dict:
        return {
            "total_team": self.total_team,
            "filled_team": self.filled_team,
            "total_role_slots": self.total_role_slots,
            "remaining_team": self.remaining_team,
        }


def calculate_team_capacity(total_team: int, member_statuses: Iterable[str], role_slots: Iterable[int]) -> TeamCapacity:
    """
    Pure calculation over already-loaded member statuses and role slot counts.
    """
    filled = sum(1 for s in member_statuses if s in ProjectMember.ACTIVE_STATUSES)
    return TeamCapacity(
        total_team=total_team or 0,
        filled_team=filled,
        total_role_slots=sum(role_slots),
    )


def capacity_for_project(project) -> TeamCapacity:
    """
    Capacity of a saved project, read from its prefetched (or lazily loaded)
    members and roles.
    """
    return calculate_team_capacity(
        project.total_team,
        [m.status for m in project.members.all()],
        [r.slots_available for r in project.roles.all()],
    )


def check_stage4_allocation(total_team: int, seeded_members: int, role_slots: Iterable[int]):
    """
    Returns (ok: bool, reason: str) for a proposed stage-4 allocation.
    """
    requested = seeded_members + sum(role_slots)
    if requested <= 0:
        return False, "At least one role slot or team member is required"
    if requested > (total_team or 0):
        return False, (
            f"Team capacity exceeded: requested {requested} "
            f"(members {seeded_members} + open slots {requested - seeded_members}), "
            f"but total team size is {total_team or 0}"
        )
    return True, ""
