from fastapi import APIRouter

from invoicing.api.routers import auth, invoices, customers, accounts

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(invoices.router)
api_router.include_router(customers.router)
api_router.include_router(accounts.router)
