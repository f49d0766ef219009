from fastapi import APIRouter

from .routes import members, memberships, ping, sports
from .schemas import ErrorResponse

# Error bodies produced by error_handlers.py, documented on every store-backed route
STORE_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid entity or missing required field"},
    404: {"model": ErrorResponse, "description": "Not found"},
    409: {"model": ErrorResponse, "description": "Already exists"},
    500: {"model": ErrorResponse, "description": "Internal storage error"},
}

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(ping.router)
api_router.include_router(members.router, responses=STORE_ERROR_RESPONSES)
api_router.include_router(sports.router, responses=STORE_ERROR_RESPONSES)
api_router.include_router(memberships.router, responses=STORE_ERROR_RESPONSES)
