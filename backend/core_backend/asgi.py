import os

from django.core.asgi import get_asgi_application

# Set the Django settings module before the app registry is populated
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core_backend.settings")

application = get_asgi_application()
