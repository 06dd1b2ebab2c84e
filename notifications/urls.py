from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('api/notifications/', views.notification_list, name='notification_list'),
    path('api/notifications/preferences/', views.notification_preferences, name='preferences'),
    path('api/notifications/<int:notification_id>/dismiss/', views.dismiss_notification, name='dismiss'),
]
