# api/serializers.py
from rest_framework import serializers

from algorithms.blood_compatibility import BloodType, InvalidBloodTypeError
from appointments.models import Appointment
from donors.models import DonorProfile
from hospitals.models import BloodCenter, BloodInventory, City, Doctor, Hospital
from receivers.models import ReceiverProfile


class BloodTypeField(serializers.CharField):
    """
    Accepts only the eight canonical spellings ('A+', 'O-', ...).
    Parsed at the boundary so nothing downstream sees a bad value.
    """
    default_error_messages = {
        'invalid_blood_type': '"{value}" is not a valid blood type. Use one of: {choices}.',
    }

    def __init__(self, **kwargs):
        kwargs.setdefault('max_length', 3)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            return BloodType.parse(value).value
        except InvalidBloodTypeError:
            self.fail(
                'invalid_blood_type',
                value=value,
                choices=', '.join(t.value for t in BloodType),
            )


class CitySerializer(serializers.ModelSerializer):
    class Meta:
        model = City
        fields = ['city_id', 'city_name']


class DonorSerializer(serializers.ModelSerializer):
    blood_type = BloodTypeField()
    city_name = serializers.CharField(source='city.city_name', read_only=True, default=None)

    class Meta:
        model = DonorProfile
        fields = [
            'donor_id',
            'full_name',
            'age',
            'sex',
            'blood_type',
            'phone',
            'city',
            'city_name',
            'is_available',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']


class ReceiverSerializer(serializers.ModelSerializer):
    blood_type = BloodTypeField()
    city_name = serializers.CharField(source='city.city_name', read_only=True, default=None)

    class Meta:
        model = ReceiverProfile
        fields = [
            'receiver_id',
            'full_name',
            'age',
            'sex',
            'blood_type',
            'registration_date',
            'phone',
            'city',
            'city_name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']


class DoctorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Doctor
        fields = ['doctor_id', 'doctor_name', 'phone']


class HospitalSerializer(serializers.ModelSerializer):
    city_name = serializers.CharField(source='city.city_name', read_only=True, default=None)
    doctors = DoctorSerializer(many=True, read_only=True)
    blood_type_required = BloodTypeField(required=False, allow_blank=True)

    class Meta:
        model = Hospital
        fields = ['hospital_id', 'hospital_name', 'city', 'city_name', 'blood_type_required', 'doctors']
        extra_kwargs = {'city': {'required': True, 'allow_null': False}}


class BloodCenterSerializer(serializers.ModelSerializer):
    city_name = serializers.CharField(source='city.city_name', read_only=True, default=None)
    distance_km = serializers.SerializerMethodField()

    class Meta:
        model = BloodCenter
        fields = [
            'center_id',
            'center_name',
            'address',
            'city',
            'city_name',
            'latitude',
            'longitude',
            'phone',
            'operating_hours',
            'last_updated',
            'distance_km',
        ]

    def get_distance_km(self, obj):
        distance = getattr(obj, 'distance_km', None)
        return round(distance, 2) if distance is not None else None


class BloodInventorySerializer(serializers.ModelSerializer):
    blood_group = BloodTypeField()
    hospital_name = serializers.CharField(source='hospital.hospital_name', read_only=True, default=None)
    center_name = serializers.CharField(source='center.center_name', read_only=True, default=None)
    doctor_name = serializers.CharField(source='doctor.doctor_name', read_only=True, default=None)

    class Meta:
        model = BloodInventory
        fields = [
            'id',
            'blood_group',
            'quantity',
            'status',
            'expiry_date',
            'hospital',
            'hospital_name',
            'center',
            'center_name',
            'doctor',
            'doctor_name',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate(self, attrs):
        # Partial updates only carry changed fields; fall back to the instance
        hospital = attrs.get('hospital', getattr(self.instance, 'hospital', None))
        center = attrs.get('center', getattr(self.instance, 'center', None))
        if hospital and center:
            raise serializers.ValidationError('Only one of hospital or center can be specified.')
        if not hospital and not center:
            raise serializers.ValidationError('One of hospital or center is required.')
        return attrs


class AppointmentSerializer(serializers.ModelSerializer):
    blood_center_name = serializers.CharField(source='blood_center.center_name', read_only=True)
    blood_center_address = serializers.CharField(source='blood_center.address', read_only=True)
    receiver_name = serializers.CharField(source='receiver.full_name', read_only=True)
    receiver_blood_type = serializers.CharField(source='receiver.blood_type', read_only=True)
    donor_name = serializers.CharField(source='donor.full_name', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id',
            'donor',
            'donor_name',
            'receiver',
            'receiver_name',
            'receiver_blood_type',
            'blood_center',
            'blood_center_name',
            'blood_center_address',
            'appointment_date',
            'status',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate(self, attrs):
        # New appointments always start pending
        if self.instance is None:
            attrs['status'] = 'pending'
        return attrs


class MatchedDonorSerializer(DonorSerializer):
    class Meta(DonorSerializer.Meta):
        fields = [f for f in DonorSerializer.Meta.fields if f != 'updated_at']


def serialize_match(result, care_team=None):
    """JSON body for the find-compatible-donors surface"""
    donors = MatchedDonorSerializer(result.donors, many=True).data
    if care_team is not None:
        for row, assignment in zip(donors, care_team):
            hospital, doctor = assignment['hospital'], assignment['doctor']
            row['care_team'] = {
                'hospital_id': hospital.hospital_id if hospital else None,
                'hospital_name': hospital.hospital_name if hospital else None,
                'doctor_id': doctor.doctor_id if doctor else None,
                'doctor_name': doctor.doctor_name if doctor else None,
            }

    return {
        'receiver_id': result.receiver.pk,
        'blood_type': result.blood_type.value,
        'compatible_types': [t.value for t in BloodType if t in result.compatible_types],
        'donors': donors,
        'count': len(donors),
        'skipped': result.skipped,
    }
