"""Route bundles for the API."""
from . import blob, system

ROUTERS = [
    blob.router,
    system.router,
]
