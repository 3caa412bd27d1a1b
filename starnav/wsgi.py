"""
WSGI config for the StarNav service-order project.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'starnav.settings')
application = get_wsgi_application()
