from django.urls import path

from . import views

app_name = 'blood_requests'

urlpatterns = [
    path('blood-requests', views.create_request, name='create'),
    path('blood-requests/user/<int:user_id>', views.user_requests, name='user-requests'),
    path('blood-requests/<int:pk>', views.request_detail, name='detail'),
    path('blood-requests/<int:pk>/status', views.update_status, name='status'),
    path('blood-requests/<int:pk>/matches', views.request_matches, name='matches'),
]
