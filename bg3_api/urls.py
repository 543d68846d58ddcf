"""
URL configuration for the bg3_api project.

The `urlpatterns` list routes URLs to views. Anything not matched by an
earlier pattern falls through to a JSON 404 naming the requested path.
"""

from django.contrib import admin
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from api.web_views import HealthView, route_not_found

urlpatterns = [
    path('admin/', admin.site.urls),

    path('health', HealthView.as_view(), name='health'),
    path('api/v1/', include('api.urls')),

    path('api-docs/schema', SpectacularAPIView.as_view(), name='schema'),
    path('api-docs', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    re_path(r'^.*$', route_not_found, name='route-not-found'),
]

handler404 = 'api.web_views.route_not_found'
handler500 = 'api.web_views.server_error'
