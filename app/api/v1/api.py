from fastapi import APIRouter

from app.api.v1.routes import users, budgets, categories, transactions, dashboard, auth, goals

api_router = APIRouter()

# Each router carries its own prefix and tags
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(budgets.router)
api_router.include_router(categories.router)
api_router.include_router(transactions.router)
api_router.include_router(goals.router)
api_router.include_router(dashboard.router)
