from fastapi import APIRouter
from contactbook.api.v1.routers import health, customers

# This is the main router of the API.
# The customer routes keep the singular '/customer' path the existing
# clients already call.
api_router = APIRouter()

api_router.include_router(health.router, tags=["Health"])
api_router.include_router(customers.router, prefix="/customer", tags=["Customers"])
