from django.urls import path
from . import views

app_name = 'hydration'

urlpatterns = [
    path('api/hydration/', views.hydration_logs, name='hydration_logs'),
    path('api/hydration/<int:log_id>/', views.delete_hydration_log, name='delete_log'),
]
