# catalog/services.py
from typing import Iterable, List, Type

from django.db import IntegrityError, transaction

from core.exceptions import ValidationError
from .models import CatalogEntry

MAX_NAME_LENGTH = 100


class CatalogService:
    """
    Find-or-create helpers for Skill / Tag / Benefit / Timeline.

    Called inside the caller's transaction: a row created here is rolled
    back together with whatever stage update referenced it.
    """

    @staticmethod
    def normalize(name) -> str:
        if name is None:
            return ""
        return " ".join(str(name).split())

    @staticmethod
    def find_or_create(model: Type[CatalogEntry], name) -> CatalogEntry:
        clean = CatalogService.normalize(name)
        if not clean:
            raise ValidationError(f"{model._meta.verbose_name.capitalize()} name cannot be empty")
        if len(clean) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"{model._meta.verbose_name.capitalize()} name must be at most {MAX_NAME_LENGTH} characters"
            )

        existing = model.objects.filter(name__iexact=clean).first()
        if existing:
            return existing

        try:
            # Savepoint so a lost race does not poison the outer transaction
            with transaction.atomic():
                return model.objects.create(name=clean)
        except IntegrityError:
            # Another request created the same name between lookup and insert
            return model.objects.get(name__iexact=clean)

    @staticmethod
    def find_or_create_many(model: Type[CatalogEntry], names: Iterable) -> List[CatalogEntry]:
        """
        Order-preserving, case-insensitively de-duplicated; blank names skipped.
        """
        entries = []
        seen = set()
        for name in names or []:
            clean = CatalogService.normalize(name)
            if not clean or clean.lower() in seen:
                continue
            seen.add(clean.lower())
            entries.append(CatalogService.find_or_create(model, clean))
        return entries
