from fastapi import APIRouter

from skilldocs import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": "skilldocs", "version": __version__}
