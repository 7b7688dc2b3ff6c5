from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import settings
from .deps import close_gateway
from .log import configure_logging
from .routers.markets import router as markets_router

configure_logging(settings.log_level)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_gateway()

app = FastAPI(title="Crypto Dashboard Market Data", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(markets_router)
