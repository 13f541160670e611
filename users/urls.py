# users/urls.py

from django.urls import path
from .views import (
    MyProfileView,
    ChangePasswordView,
    CollaborationStatusView,
    UserListView,
    ReadyUsersView,
)

urlpatterns = [
    path('', UserListView.as_view(), name='user-list'),
    path('ready/', ReadyUsersView.as_view(), name='user-ready-list'),
    path('me/', MyProfileView.as_view(), name='user-me'),
    path('me/password/', ChangePasswordView.as_view(), name='user-change-password'),
    path('me/collaboration-status/', CollaborationStatusView.as_view(), name='user-collaboration-status'),
]
