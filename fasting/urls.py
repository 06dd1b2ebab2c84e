from django.urls import path
from . import views

app_name = 'fasting'

urlpatterns = [
    path('api/sessions/', views.session_history, name='session_history'),
    path('api/sessions/active/', views.active_session, name='active_session'),
    path('api/sessions/start/', views.start_session, name='start_session'),
    path('api/sessions/stop/', views.stop_session, name='stop_session'),
    path('api/sessions/goal/', views.update_goal, name='update_goal'),
    path('api/sessions/<int:session_id>/', views.delete_session, name='delete_session'),
]
