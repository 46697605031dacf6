from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from . import views

app_name = 'accounts'

urlpatterns = [
    # ========================================
    # AUTHENTICATION
    # ========================================
    path('auth/signup', views.signup, name='signup'),
    path('auth/signin', views.signin, name='signin'),
    path('auth/me', views.me, name='me'),

    # ========================================
    # JWT TOKEN MANAGEMENT
    # ========================================
    path('auth/token/refresh', TokenRefreshView.as_view(), name='token_refresh'),

    # ========================================
    # PROFILE
    # ========================================
    path('users/profile', views.profile, name='profile'),
]
