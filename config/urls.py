"""
URL configuration for EduRPG.

Every API lives under ``/api/``; the OpenAPI schema and Swagger UI are
served from ``/api/schema/`` and ``/api/docs/``.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),

    # API endpoints
    path('api/xp/', include('apps.xp.urls')),
    path('api/shop/', include('apps.shop.urls')),
    path('api/jobs/', include('apps.jobs.urls')),
    path('api/events/', include('apps.events.urls')),
    path('api/achievements/', include('apps.achievements.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
