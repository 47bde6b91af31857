# api/v1/router.py
from fastapi import APIRouter

from . import auth, calories, chatbot, meals, weight

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(calories.router, prefix="/calories", tags=["Calories"])
api_router.include_router(weight.router, prefix="/weight", tags=["Weight"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(chatbot.router, prefix="/chatbot", tags=["Chatbot"])
