from fastapi import APIRouter

from ..config import settings

router = APIRouter()


@router.get("")
async def health_check() -> dict[str, str]:
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.app_env,
    }
