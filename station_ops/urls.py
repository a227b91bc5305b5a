# station_ops/urls.py
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("api/v1/auth/", include("accounts.urls")),

    path("api/v1/station/", include("stations.urls")),
    path("api/v1/sales/", include("sales.urls")),
    path("api/v1/supply/", include("supply.urls")),
    path("api/v1/analytics/", include("analytics.urls")),

    path('api/schema/', SpectacularAPIView.as_view(), name='openapi-schema'),

    path(
        'api/docs/',
        SpectacularSwaggerView.as_view(url='/api/schema/'),
        name='swagger-ui'
    ),

    path("admin/", admin.site.urls),
]
