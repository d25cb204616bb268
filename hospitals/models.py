# hospitals/models.py
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from algorithms.blood_compatibility import BLOOD_TYPE_CHOICES
from algorithms import inventory


class City(models.Model):
    city_id = models.CharField(max_length=20, primary_key=True)
    city_name = models.CharField(max_length=100)

    def __str__(self):
        return self.city_name

    class Meta:
        ordering = ['city_name']
        verbose_name_plural = 'Cities'


class Doctor(models.Model):
    doctor_id = models.CharField(max_length=20, primary_key=True)
    doctor_name = models.CharField(max_length=200)
    phone = models.CharField(max_length=15, blank=True)

    def __str__(self):
        return self.doctor_name

    class Meta:
        ordering = ['doctor_name']


class Hospital(models.Model):
    hospital_id = models.CharField(max_length=20, primary_key=True)
    hospital_name = models.CharField(max_length=200)
    city = models.ForeignKey(City, on_delete=models.SET_NULL, null=True, blank=True, related_name='hospitals')
    doctors = models.ManyToManyField(Doctor, blank=True, related_name='hospitals')

    # Blood group the hospital is currently short of (informational)
    blood_type_required = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.hospital_name

    class Meta:
        ordering = ['hospital_name']


class BloodCenter(models.Model):
    center_id = models.CharField(max_length=40, primary_key=True)
    center_name = models.CharField(max_length=200)
    address = models.TextField(blank=True)
    city = models.ForeignKey(City, on_delete=models.SET_NULL, null=True, blank=True, related_name='blood_centers')

    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    phone = models.CharField(max_length=20, blank=True)
    operating_hours = models.CharField(max_length=200, blank=True)
    last_updated = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.center_name

    class Meta:
        ordering = ['center_name']


class BloodInventory(models.Model):
    STATUS_CHOICES = [
        (inventory.STATUS_AVAILABLE, 'Available'),
        (inventory.STATUS_RESERVED, 'Reserved'),
        (inventory.STATUS_USED, 'Used'),
        (inventory.STATUS_EXPIRED, 'Expired'),
    ]

    blood_group = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, db_index=True)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=inventory.STATUS_AVAILABLE)
    expiry_date = models.DateField(null=True, blank=True)

    # Stock is held either at a hospital or at a blood center, never both
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, null=True, blank=True, related_name='inventory')
    center = models.ForeignKey(BloodCenter, on_delete=models.CASCADE, null=True, blank=True, related_name='inventory')
    doctor = models.ForeignKey(Doctor, on_delete=models.SET_NULL, null=True, blank=True, related_name='inventory')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def clean(self):
        if bool(self.hospital_id) == bool(self.center_id):
            raise ValidationError('Exactly one of hospital or center must be set.')

    @property
    def location_name(self):
        location = self.hospital or self.center
        return str(location) if location else None

    def __str__(self):
        return f"{self.blood_group} x{self.quantity} @ {self.location_name} ({self.status})"

    class Meta:
        ordering = ['expiry_date', 'id']
        verbose_name = 'Blood Inventory'
        verbose_name_plural = 'Blood Inventory'
