# catalog/models.py
from django.db import models
from django.db.models.functions import Lower


class CatalogEntry(models.Model):
    """
    Normalized lookup value shared across projects and users.
    Unique by case-insensitive name; created lazily, never deleted by normal flows.
    """
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                Lower("name"),
                name="%(app_label)s_%(class)s_name_ci_uniq",
            ),
        ]

    def __str__(self):
        return self.name


class Skill(CatalogEntry):
    pass


class Tag(CatalogEntry):
    pass


class Benefit(CatalogEntry):
    pass


class Timeline(CatalogEntry):
    """Milestone label; per-project progress lives on ProjectTimeline."""


CATALOG_MODELS = {
    "skills": Skill,
    "tags": Tag,
    "benefits": Benefit,
    "timelines": Timeline,
}
