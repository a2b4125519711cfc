from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.cache import close_redis_pool
from app.core.config import settings
from app.core.logging import RequestIdMiddleware, configure_logging
from app.api.v1 import recommendations

VERSION = "1.0.0"

configure_logging(settings.app_env)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_redis_pool()


app = FastAPI(
    title="Society Recommendations API",
    description="Personalized companion recommendations for the Society booking platform",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestIdMiddleware)

# Include API routers
app.include_router(recommendations.router, prefix="/api/v1/recommendations", tags=["Recommendations"])


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": VERSION}


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": "Society Recommendations API", "docs": "/docs"}
