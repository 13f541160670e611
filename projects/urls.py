# projects/urls.py
from django.urls import path
from . import views

urlpatterns = [
    # Wizard
    path("stage1/", views.ProjectStage1View.as_view(), name="project-stage1"),
    path("<int:project_id>/stage2/", views.ProjectStage2View.as_view(), name="project-stage2"),
    path("<int:project_id>/stage3/", views.ProjectStage3View.as_view(), name="project-stage3"),
    path("<int:project_id>/stage4/", views.ProjectStage4View.as_view(), name="project-stage4"),
    path("<int:project_id>/stage5/", views.ProjectStage5View.as_view(), name="project-stage5"),

    # Listings
    path("", views.ProjectListView.as_view(), name="project-list"),
    path("all/", views.PublicProjectListView.as_view(), name="project-public-list"),
    path("created/", views.CreatedProjectsView.as_view(), name="project-created"),
    path("member/", views.MemberProjectsView.as_view(), name="project-member"),
    path("public/<int:project_id>/", views.PublicProjectDetailView.as_view(), name="project-public-detail"),
    path("timeline-status-options/", views.TimelineStatusOptionsView.as_view(), name="timeline-status-options"),

    # Applications by id
    path("applications/<int:application_id>/", views.ApplicationDetailView.as_view(), name="application-detail"),
    path("applications/<int:application_id>/summary/", views.ApplicationSummaryView.as_view(), name="application-summary"),
    path("applications/<int:application_id>/review/", views.ReviewApplicationView.as_view(), name="application-review"),
    path("applications/<int:application_id>/withdraw/", views.WithdrawApplicationView.as_view(), name="application-withdraw"),

    # Single project
    path("<int:project_id>/", views.ProjectDetailView.as_view(), name="project-detail"),
    path("<int:project_id>/team-capacity/", views.TeamCapacityView.as_view(), name="project-team-capacity"),
    path(
        "<int:project_id>/timeline/<int:entry_id>/status/",
        views.TimelineStatusUpdateView.as_view(),
        name="project-timeline-status",
    ),
    path("<int:project_id>/apply/", views.ApplyProjectView.as_view(), name="project-apply"),
    path("<int:project_id>/applications/", views.ProjectApplicationsView.as_view(), name="project-applications"),
    path("<int:project_id>/members/", views.ProjectMembersView.as_view(), name="project-members"),
    path("<int:project_id>/members/<int:user_id>/", views.RemoveMemberView.as_view(), name="project-member-remove"),
    path("<int:project_id>/invite/", views.InviteMemberView.as_view(), name="project-invite"),
    path(
        "<int:project_id>/invitation/respond/",
        views.RespondInvitationView.as_view(),
        name="project-invitation-respond",
    ),
]
