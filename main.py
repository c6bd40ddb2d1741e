from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.calculate import router as calculate_router
from config import get_settings
from logger import setup_logging

setup_logging(get_settings().log_level)

app = FastAPI(title="feed-additive-roi")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculate_router, prefix="/api")
