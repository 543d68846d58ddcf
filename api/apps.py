"""
Application configuration for the `api` app.

Builds the StorageClient shared by every API view once the app registry is
ready.
"""

from django.apps import AppConfig


class ApiConfig(AppConfig):
    name = 'api'
    verbose_name = "Character Sheet API"
    default_auto_field = 'django.db.models.BigAutoField'

    storage = None

    def ready(self):
        from .storage import StorageClient

        self.storage = StorageClient()
