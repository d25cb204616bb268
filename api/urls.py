# api/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'donors', views.DonorViewSet, basename='donor')
router.register(r'receivers', views.ReceiverViewSet, basename='receiver')
router.register(r'cities', views.CityViewSet, basename='city')
router.register(r'hospitals', views.HospitalViewSet, basename='hospital')
router.register(r'inventory', views.BloodInventoryViewSet, basename='inventory')
router.register(r'appointments', views.AppointmentViewSet, basename='appointment')
router.register(r'blood-centers', views.BloodCenterViewSet, basename='blood-center')

app_name = 'api'

urlpatterns = [
    path('', include(router.urls)),
    path('compatibility/', views.compatibility, name='compatibility'),
]

# Available endpoints:
# GET/POST          /api/donors/                     - List (?blood_type=) / register donors
# GET/PATCH/DELETE  /api/donors/{id}/
# GET/POST          /api/receivers/                  - List (?blood_type=) / register receivers
# GET/POST          /api/receivers/{id}/match/       - Compatible donors (?care_team=1)
# GET/POST          /api/cities/                     - City lookup / add
# GET/POST          /api/hospitals/                  - List (?city_id=) / register hospitals
# GET/POST          /api/inventory/                  - ?blood_group=&compatible=true, ?hospital_id=, ?center_id=
# GET               /api/inventory/stats/            - Records by status, expiring soon, total units
# GET/POST          /api/appointments/               - ?donor_id=, ?receiver_id=
# PATCH             /api/appointments/{id}/          - Update status
# GET               /api/blood-centers/nearby/       - ?lat=&lng=&radius=
# GET               /api/compatibility/              - Compatibility chart
