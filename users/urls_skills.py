# users/urls_skills.py

from django.urls import path
from catalog.views import AllSkillsView
from .views import MySkillsView

urlpatterns = [
    path('all/', AllSkillsView.as_view(), name='skills-all'),
    path('', MySkillsView.as_view(), name='my-skills'),
]
