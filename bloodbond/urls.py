from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # API
    path('api/', include('accounts.urls')),
    path('api/', include('donors.urls')),
    path('api/', include('blood_requests.urls')),
    path('api/', include('camps.urls')),
]
