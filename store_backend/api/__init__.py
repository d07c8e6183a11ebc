# store_backend/api/__init__.py
from fastapi import FastAPI

from store_backend.api.routers import admin, carts, checkout, discounts, health


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(discounts.router)
    app.include_router(admin.router)
    return app
