from django.urls import path, include
from rest_framework.routers import SimpleRouter

from sales.views import SaleViewSet

router = SimpleRouter()
router.register("", SaleViewSet, basename="sales")

urlpatterns = [
    path("", include(router.urls)),
]
