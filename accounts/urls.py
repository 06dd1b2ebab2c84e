from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('auth/signin/', views.signin_page, name='signin'),
    path('auth/signup/', views.signup_page, name='signup'),
    path('api/auth/signup/', views.signup, name='api_signup'),
    path('api/auth/signin/', views.signin, name='api_signin'),
    path('api/auth/signout/', views.signout, name='api_signout'),
]
