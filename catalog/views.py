from rest_framework.views import APIView

from core.exceptions import NotFoundError
from core.responses import api_success
from .models import CATALOG_MODELS, Skill
from .serializers import CatalogEntrySerializer


class CatalogListView(APIView):
    """
    GET /api/catalog/<kind>/            kind: skills | tags | benefits | timelines
    GET /api/catalog/<kind>/?q=py       case-insensitive substring filter
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request, kind):
        model = CATALOG_MODELS.get(kind)
        if model is None:
            raise NotFoundError(f"Unknown catalog '{kind}'")

        qs = model.objects.all()
        query = request.query_params.get("q", "").strip()
        if query:
            qs = qs.filter(name__icontains=query)

        return api_success(
            CatalogEntrySerializer(qs.order_by("name"), many=True).data,
            f"{kind.capitalize()} retrieved successfully",
        )


class AllSkillsView(APIView):
    """GET /api/skills/all/"""
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        skills = Skill.objects.order_by("name")
        return api_success(
            CatalogEntrySerializer(skills, many=True).data,
            "Skills retrieved successfully",
        )
