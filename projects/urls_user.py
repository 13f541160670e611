# projects/urls_user.py
from django.urls import path
from . import views

urlpatterns = [
    path("applications/", views.MyApplicationsView.as_view(), name="my-applications"),
    path("project-invitations/", views.MyInvitationsView.as_view(), name="my-project-invitations"),
]
