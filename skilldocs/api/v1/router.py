from fastapi import APIRouter

from skilldocs.api.v1.endpoints import health, lint, skills

v1_router = APIRouter()
v1_router.include_router(health.router, tags=["health"])
v1_router.include_router(skills.router, tags=["skills"])
v1_router.include_router(lint.router, tags=["lint"])
