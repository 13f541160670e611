from django.urls import path
from .views import CatalogListView

urlpatterns = [
    path("<str:kind>/", CatalogListView.as_view(), name="catalog-list"),
]
