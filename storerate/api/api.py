"""
API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from storerate.api.endpoints import admin, auth, health, owner, user

api_router = APIRouter()

# Signup, login, password change
api_router.include_router(auth.router)

# Role-scoped areas
api_router.include_router(admin.router)
api_router.include_router(user.router)
api_router.include_router(owner.router)

# Liveness
api_router.include_router(health.router)
