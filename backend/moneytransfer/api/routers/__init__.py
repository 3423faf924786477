from fastapi import APIRouter

from moneytransfer.api.routers import accounts, health, transfers

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(transfers.router)
api_router.include_router(accounts.router)
