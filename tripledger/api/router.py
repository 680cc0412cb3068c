"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripledger.api.routes import trips, expenses, settlements, payments

api_router = APIRouter()

# Include all route modules
api_router.include_router(trips.router)
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(payments.router)
