from fastapi import APIRouter

router = APIRouter(prefix="/slack", tags=["slack"])

# Import route modules to register endpoints on the router
from checkin.slack import commands, events  # noqa: E402, F401
