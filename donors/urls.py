# donors/urls.py

from django.urls import path
from donors import views

app_name = 'donors'

urlpatterns = [
    path('donors/register', views.register, name='register'),
    path('donors/find', views.find, name='find'),
    path('donors/eligibility/<int:user_id>', views.eligibility, name='eligibility'),
    path('donors/cancel/<int:user_id>', views.cancel_registration, name='cancel'),

    # Donations
    path('donations', views.create_donation, name='create_donation'),
    path('donations/user/<int:user_id>', views.donation_history, name='donation_history'),
]
