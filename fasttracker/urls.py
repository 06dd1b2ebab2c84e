"""
URL configuration for the fasttracker project.

Each app mounts its own API routes under /api/; the dashboard page is the
catch-all at the site root.
"""

from django.contrib import admin
from django.urls import path, include
from fasttracker import views as home_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("accounts.urls")),
    path("", include("fasting.urls")),
    path("", include("hydration.urls")),
    path("", include("mood.urls")),
    path("", include("notifications.urls")),
    path("api/dashboard/", home_views.dashboard_api, name='dashboard_api'),
    path("", home_views.home, name='home'),
]
