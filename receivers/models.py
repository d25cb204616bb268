# receivers/models.py
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone

from algorithms.blood_compatibility import BLOOD_TYPE_CHOICES, compatible_donors
from donors.models import SEX_CHOICES


class ReceiverProfile(models.Model):
    receiver_id = models.CharField(max_length=40, primary_key=True)

    full_name = models.CharField(max_length=200)
    age = models.PositiveIntegerField(validators=[MinValueValidator(0), MaxValueValidator(120)])
    sex = models.CharField(max_length=1, choices=SEX_CHOICES)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    registration_date = models.DateField(default=timezone.localdate)
    phone = models.CharField(max_length=15, blank=True)
    city = models.ForeignKey(
        'hospitals.City',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='receivers'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def compatible_donor_types(self):
        """Donor blood types this receiver can accept (raises on a corrupt blood_type)"""
        return compatible_donors(self.blood_type)

    def __str__(self):
        return f"{self.full_name} ({self.blood_type})"

    class Meta:
        ordering = ['-registration_date', 'receiver_id']
        verbose_name = 'Receiver Profile'
        verbose_name_plural = 'Receiver Profiles'
