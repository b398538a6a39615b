# emprecords/routers/__init__.py

from fastapi import APIRouter

from . import auth_router, profile_router, employee_router

# Mismo prefijo que usa el cliente web
api_router = APIRouter(prefix="/api")

api_router.include_router(auth_router.router)
api_router.include_router(profile_router.router)
api_router.include_router(employee_router.router)
