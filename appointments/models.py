# appointments/models.py
from django.db import models


class Appointment(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    donor = models.ForeignKey('donors.DonorProfile', on_delete=models.CASCADE, related_name='appointments')
    receiver = models.ForeignKey('receivers.ReceiverProfile', on_delete=models.CASCADE, related_name='appointments')
    blood_center = models.ForeignKey('hospitals.BloodCenter', on_delete=models.PROTECT, related_name='appointments')

    appointment_date = models.DateTimeField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.donor} -> {self.receiver} on {self.appointment_date:%Y-%m-%d} ({self.status})"

    class Meta:
        ordering = ['appointment_date', 'id']
        indexes = [
            models.Index(fields=['donor', 'appointment_date']),
            models.Index(fields=['receiver', 'appointment_date']),
        ]
