from fastapi import APIRouter

from linkhub.api.v1 import admin, auth, health, links, permissions, public, rooms, websocket


api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(links.router, prefix="/links", tags=["links"])
api_router.include_router(public.router, prefix="/public", tags=["public"])
api_router.include_router(websocket.router, prefix="/ws", tags=["websocket"])
