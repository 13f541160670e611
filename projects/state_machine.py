# projects/state_machine.py
"""
Project wizard and recruitment state machines.

Wizard: stage N may run once completion_stage >= N - 1.
        completion_stage never decreases; stage 5 publishes.

Application: pending → accepted | rejected | withdrawn   (all terminal)
Invitation:  invited → accepted | declined              (both terminal)

Any transition not in the tables below is rejected.
"""
from typing import Tuple
import logging

from .models import Project, ProjectApplication, ProjectMember

logger = logging.getLogger('synergazing.projects')


APPLICATION_TRANSITIONS = {
    ProjectApplication.STATUS_PENDING: [
        ProjectApplication.STATUS_ACCEPTED,
        ProjectApplication.STATUS_REJECTED,
        ProjectApplication.STATUS_WITHDRAWN,
    ],
}

INVITATION_TRANSITIONS = {
    ProjectMember.STATUS_INVITED: [
        ProjectMember.STATUS_ACCEPTED,
        ProjectMember.STATUS_DECLINED,
    ],
}


def can_run_stage(project: Project, stage: int) -> Tuple[bool, str]:
    """
    Check if a wizard stage may run for the project.

    Returns (can_run: bool, reason: str)
    """
    if stage < 1 or stage > Project.FINAL_STAGE:
        return False, f"Invalid stage: {stage}"

    if project.completion_stage < stage - 1:
        return False, (
            f"Stage {stage - 1} must be completed first "
            f"(project is at stage {project.completion_stage})"
        )

    return True, ""


def advance_stage(project: Project, stage: int, actor=None) -> int:
    """
    Record that a stage was saved. Re-running an earlier stage keeps the
    higher completion_stage; the final stage publishes the project.

    Does not save; the caller saves inside its transaction.
    """
    old_stage = project.completion_stage
    project.completion_stage = max(old_stage, stage)

    old_status = project.status
    if stage == Project.FINAL_STAGE and project.status == Project.STATUS_DRAFT:
        project.status = Project.STATUS_PUBLISHED

    logger.info(
        f"Project stage saved: project={project.id}, stage={stage}, "
        f"completion={old_stage}->{project.completion_stage}, "
        f"status={old_status}->{project.status}, actor={getattr(actor, 'id', 'unknown')}"
    )
    return project.completion_stage


def _can_transition(transitions: dict, choices: list, current: str, new_status: str) -> Tuple[bool, str]:
    if new_status not in dict(choices):
        return False, f"Invalid status: {new_status}"

    allowed = transitions.get(current, [])
    if new_status not in allowed:
        return False, f"Cannot transition from '{current}' to '{new_status}'"

    return True, ""


def can_transition_application(application: ProjectApplication, new_status: str) -> Tuple[bool, str]:
    return _can_transition(
        APPLICATION_TRANSITIONS,
        ProjectApplication.STATUS_CHOICES,
        application.status,
        new_status,
    )


def can_transition_invitation(member: ProjectMember, new_status: str) -> Tuple[bool, str]:
    return _can_transition(
        INVITATION_TRANSITIONS,
        ProjectMember.STATUS_CHOICES,
        member.status,
        new_status,
    )
