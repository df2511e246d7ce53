import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.database import init_db
from src.catalog import router as catalog_router
from src.fares import router as fares_router
from src.tickets import router as tickets_router
from src.trips import router as trips_router
from src.analytics import router as analytics_router
from src.tracking import router as tracking_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Transit Fare & Ticketing Engine API",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    catalog_router,
    prefix=f"{settings.API_V1_STR}/catalog",
    tags=["Reference Catalog"]
)

app.include_router(
    fares_router,
    prefix=f"{settings.API_V1_STR}/fares",
    tags=["Fares"]
)

app.include_router(
    tickets_router,
    prefix=f"{settings.API_V1_STR}/tickets",
    tags=["Ticketing"]
)

app.include_router(
    trips_router,
    prefix=f"{settings.API_V1_STR}/trips",
    tags=["Trips"]
)

app.include_router(
    analytics_router,
    prefix=f"{settings.API_V1_STR}/analytics",
    tags=["Analytics"]
)

app.include_router(
    tracking_router,
    prefix=f"{settings.API_V1_STR}/tracking",
    tags=["Vehicle Tracking"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Transit Fare & Ticketing Engine API",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
