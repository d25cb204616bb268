from django.apps import AppConfig


class ReceiversConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'receivers'
