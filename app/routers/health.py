import time
from fastapi import APIRouter

router = APIRouter(tags=["health"])

@router.get("/health")
async def health_check():
    return {
        "status": "UP",
        "timestamp": int(time.time() * 1000),
        "message": "Backend service is running",
    }
