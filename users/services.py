# users/services.py
import logging

from django.db import transaction
from django.db.models import Q

from catalog.models import Skill
from catalog.services import CatalogService
from core.exceptions import ValidationError
from .models import User, UserSkill

logger = logging.getLogger("synergazing.users")


class SkillProfileService:

    @staticmethod
    def replace_user_skills(user: User, entries):
        """
        Replace the user's skill set wholesale.

        entries: iterable of {"name": str, "proficiency": int}
        Later duplicates of the same (case-insensitive) skill overwrite earlier ones.
        """
        with transaction.atomic():
            UserSkill.objects.filter(user=user).delete()

            by_skill = {}
            for entry in entries:
                skill = CatalogService.find_or_create(Skill, entry.get("name"))
                by_skill[skill.pk] = (skill, entry.get("proficiency", 0))

            UserSkill.objects.bulk_create([
                UserSkill(user=user, skill=skill, proficiency=proficiency)
                for skill, proficiency in by_skill.values()
            ])

        logger.info(f"User skills replaced: user={user.id}, count={len(by_skill)}")
        return UserSkill.objects.filter(user=user).select_related("skill")

    @staticmethod
    def set_collaboration_status(user: User, status: str) -> User:
        if status not in dict(User.COLLAB_CHOICES):
            raise ValidationError(
                f"Invalid collaboration status. Must be one of: {', '.join(dict(User.COLLAB_CHOICES))}"
            )
        user.status_collaboration = status
        user.save(update_fields=["status_collaboration"])
        return user

    @staticmethod
    def list_users(ready_only=False, search=None):
        """
        Active users with their skills, for collaborator discovery.
        ready_only keeps users whose status_collaboration is "ready".
        """
        qs = User.objects.filter(is_active=True)
        if ready_only:
            qs = qs.filter(status_collaboration=User.COLLAB_READY)
        if search:
            qs = qs.filter(
                Q(username__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
            )
        return qs.prefetch_related("user_skills__skill").order_by("username")
