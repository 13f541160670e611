from .projects import (
    ProjectStage1View,
    ProjectStage2View,
    ProjectStage3View,
    ProjectStage4View,
    ProjectStage5View,
    ProjectListView,
    CreatedProjectsView,
    MemberProjectsView,
    PublicProjectListView,
    PublicProjectDetailView,
    ProjectDetailView,
    TeamCapacityView,
    TimelineStatusOptionsView,
    TimelineStatusUpdateView,
)
from .members import (
    ApplyProjectView,
    ProjectApplicationsView,
    ApplicationDetailView,
    ApplicationSummaryView,
    ReviewApplicationView,
    WithdrawApplicationView,
    ProjectMembersView,
    InviteMemberView,
    RespondInvitationView,
    RemoveMemberView,
    MyApplicationsView,
    MyInvitationsView,
)
