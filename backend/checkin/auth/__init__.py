from fastapi import APIRouter

router = APIRouter(prefix="/oauth", tags=["oauth"])

from checkin.auth import oauth  # noqa: E402, F401
