from fastapi import APIRouter
from genbackend.api.routes_health import router as health_router
from genbackend.api.routes_model import router as model_router
from genbackend.api.routes_generation import router as generation_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(model_router, tags=["backend"])
router.include_router(generation_router, tags=["generations"])
