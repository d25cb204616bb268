# api/views.py
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from algorithms.blood_compatibility import BloodType, compatibility_chart
from appointments.models import Appointment
from donors.models import DonorProfile
from donors.utils import care_team_for, match_donors_for_receiver
from hospitals.models import BloodCenter, BloodInventory, City, Hospital
from hospitals.utils import get_compatible_inventory, inventory_stats, nearby_blood_centers
from receivers.models import ReceiverProfile

from .serializers import (
    AppointmentSerializer,
    BloodCenterSerializer,
    BloodInventorySerializer,
    CitySerializer,
    DonorSerializer,
    HospitalSerializer,
    ReceiverSerializer,
    serialize_match,
)

TRUTHY = ('1', 'true', 'yes')


def blood_type_param(request, name='blood_type'):
    """Parsed blood type query parameter, None when absent or 'all'"""
    value = request.query_params.get(name)
    if not value or value == 'all':
        return None
    # InvalidBloodTypeError is turned into a 400 by the exception handler
    return BloodType.parse(value).value


def float_param(request, name, required=True):
    value = request.query_params.get(name)
    if value in (None, ''):
        if required:
            raise ValidationError({name: 'This query parameter is required.'})
        return None
    try:
        return float(value)
    except ValueError:
        raise ValidationError({name: 'A number is required.'})


class DonorViewSet(viewsets.ModelViewSet):
    """Donor registration and lookup"""
    queryset = DonorProfile.objects.select_related('city')
    serializer_class = DonorSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        blood_type = blood_type_param(self.request)
        if blood_type:
            queryset = queryset.filter(blood_type=blood_type)
        return queryset


class ReceiverViewSet(viewsets.ModelViewSet):
    """Receiver registration, lookup and donor matching"""
    queryset = ReceiverProfile.objects.select_related('city')
    serializer_class = ReceiverSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        blood_type = blood_type_param(self.request)
        if blood_type:
            queryset = queryset.filter(blood_type=blood_type)
        return queryset

    @action(detail=True, methods=['get', 'post'])
    def match(self, request, pk=None):
        """Compatible available donors, newest registration first"""
        receiver = self.get_object()
        result = match_donors_for_receiver(receiver)

        care_team = None
        if request.query_params.get('care_team', '').lower() in TRUTHY:
            care_team = care_team_for(result)

        return Response(serialize_match(result, care_team=care_team))


class CityViewSet(viewsets.ModelViewSet):
    queryset = City.objects.all()
    serializer_class = CitySerializer


class HospitalViewSet(viewsets.ModelViewSet):
    """Hospital registration and lookup (?city_id=)"""
    queryset = Hospital.objects.select_related('city').prefetch_related('doctors')
    serializer_class = HospitalSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        city_id = self.request.query_params.get('city_id')
        if city_id:
            queryset = queryset.filter(city_id=city_id)
        return queryset


class BloodInventoryViewSet(viewsets.ModelViewSet):
    """
    Blood stock at hospitals and blood centers.

    Query params (first match wins):
    - blood_group + compatible=true: stock a recipient of that type can receive
    - blood_group: exact group
    - hospital_id / center_id: stock at one location
    """
    queryset = BloodInventory.objects.select_related('hospital', 'center', 'doctor')
    serializer_class = BloodInventorySerializer

    def get_queryset(self):
        params = self.request.query_params
        blood_group = blood_type_param(self.request, 'blood_group')

        if self.action == 'list':
            if blood_group and params.get('compatible', '').lower() in TRUTHY:
                return get_compatible_inventory(blood_group)
            if blood_group:
                return super().get_queryset().filter(blood_group=blood_group)
            if params.get('hospital_id'):
                return super().get_queryset().filter(hospital_id=params['hospital_id'])
            if params.get('center_id'):
                return super().get_queryset().filter(center_id=params['center_id'])
        return super().get_queryset()

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(inventory_stats())


class AppointmentViewSet(viewsets.ModelViewSet):
    """Donation appointments; status moves between pending/confirmed/completed/cancelled"""
    queryset = Appointment.objects.select_related('donor', 'receiver', 'blood_center')
    serializer_class = AppointmentSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        donor_id = self.request.query_params.get('donor_id')
        receiver_id = self.request.query_params.get('receiver_id')
        if donor_id:
            queryset = queryset.filter(donor_id=donor_id)
        if receiver_id:
            queryset = queryset.filter(receiver_id=receiver_id)
        return queryset.order_by('appointment_date', 'id')


class BloodCenterViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = BloodCenter.objects.select_related('city')
    serializer_class = BloodCenterSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        city_id = self.request.query_params.get('city_id')
        if city_id:
            queryset = queryset.filter(city_id=city_id)
        return queryset

    @action(detail=False, methods=['get'])
    def nearby(self, request):
        """Centers within `radius` km of (`lat`, `lng`), nearest first"""
        lat = float_param(request, 'lat')
        lng = float_param(request, 'lng')
        radius = float_param(request, 'radius', required=False)

        centers = []
        for center, distance in nearby_blood_centers(lat, lng, radius_km=radius):
            center.distance_km = distance
            centers.append(center)

        serializer = self.get_serializer(centers, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)


@api_view(['GET'])
def compatibility(request):
    """Static compatibility chart, read straight from the table"""
    return Response(compatibility_chart())
