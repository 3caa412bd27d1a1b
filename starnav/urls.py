"""URL configuration for the StarNav service-order project."""
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView
from rest_framework.permissions import AllowAny

urlpatterns = [
    # OpenAPI schema
    path("api/schema/", SpectacularAPIView.as_view(permission_classes=[AllowAny]), name="schema"),

    # Service order policy endpoints
    path("api/service-orders/", include("service_orders.urls")),
]
