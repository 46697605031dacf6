# camps/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter(trailing_slash=False)
router.register(r'blood-camps', views.BloodCampViewSet, basename='blood-camp')

app_name = 'camps'

urlpatterns = [
    path('', include(router.urls)),
]

# GET    /api/blood-camps            - Upcoming/ongoing camps (?state=&district=)
# GET    /api/blood-camps/{id}       - Single camp
# POST   /api/blood-camps            - Create (admin)
# PUT    /api/blood-camps/{id}       - Update (admin)
# DELETE /api/blood-camps/{id}       - Delete (admin)
