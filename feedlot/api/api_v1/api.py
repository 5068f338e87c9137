from fastapi import APIRouter

from feedlot.api.api_v1.routers import (
    dashboard,
    death_losses,
    feeding_plans,
    feeding_records,
    nutritionists,
    operations,
    pens,
    sales,
    treatments,
)

api_router = APIRouter()

api_router.include_router(operations.router)
api_router.include_router(pens.router)
api_router.include_router(feeding_plans.router)
api_router.include_router(feeding_records.router)
api_router.include_router(death_losses.router)
api_router.include_router(treatments.router)
api_router.include_router(sales.router)
api_router.include_router(nutritionists.router)
api_router.include_router(dashboard.router)
