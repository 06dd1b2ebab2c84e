from django.urls import path
from . import views

app_name = 'mood'

urlpatterns = [
    path('api/mood/', views.mood_logs, name='mood_logs'),
    path('api/mood/<int:log_id>/', views.delete_mood_log, name='delete_log'),
]
