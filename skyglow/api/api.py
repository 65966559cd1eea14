from fastapi import APIRouter

from skyglow.api.routes_light import router as light_router
from skyglow.api.routes_population import router as population_router
from skyglow.api.routes_health import router as health_router


api_router = APIRouter()

api_router.include_router(light_router)
api_router.include_router(population_router)
api_router.include_router(health_router)
