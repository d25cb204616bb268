from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator

from algorithms.blood_compatibility import BLOOD_TYPE_CHOICES, BloodType, compatible_recipients


SEX_CHOICES = [
    ('M', 'Male'),
    ('F', 'Female'),
    ('O', 'Other'),
]


# ---------------------------
# Donor Profile
# ---------------------------
class DonorProfile(models.Model):
    donor_id = models.CharField(max_length=40, primary_key=True)

    full_name = models.CharField(max_length=200)
    age = models.PositiveIntegerField(
        validators=[MinValueValidator(18), MaxValueValidator(65)]
    )
    sex = models.CharField(max_length=1, choices=SEX_CHOICES)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    phone = models.CharField(max_length=15, blank=True, db_index=True)
    city = models.ForeignKey(
        'hospitals.City',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='donors'
    )

    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def can_donate_to(self):
        """Recipient blood types this donor can give to"""
        return compatible_recipients(BloodType.parse(self.blood_type))

    def __str__(self):
        return f"{self.full_name} ({self.blood_type})"

    class Meta:
        verbose_name = "Donor Profile"
        verbose_name_plural = "Donor Profiles"
        ordering = ['-created_at', 'donor_id']
