"""
asgi.py -- ASGI entry point for the account service.

Run with:  uvicorn asgi:app --reload

Configuration comes from the environment (see core/config.py). JWT_SECRET
must be set unless DEBUG=true.
"""

from api.main import app  # noqa: F401
