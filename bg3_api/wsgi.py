"""
WSGI config for the bg3_api project.

It exposes the WSGI callable as a module-level variable named ``application``
and opens the API storage client for the lifetime of the process.
"""

import atexit
import os

from django.apps import apps
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bg3_api.settings')

application = get_wsgi_application()

storage = apps.get_app_config('api').storage
storage.connect()
atexit.register(storage.close)
