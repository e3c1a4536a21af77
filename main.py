"""
Bowling Strategy Lab - Delivery Planning API
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bowling_lab import __version__
from bowling_lab.config import settings
from bowling_lab.database import init_db
from bowling_lab.logging_utils import setup_logging
from bowling_lab.api.roster import router as roster_router
from bowling_lab.api.plan import router as plan_router
from bowling_lab.api.spell import router as spell_router

setup_logging(level=settings.LOG_LEVEL)

# Initialize FastAPI app
app = FastAPI(
    title="Bowling Strategy Lab",
    description="Seeded delivery plans for cricket bowlers",
    version=__version__,
)

# CORS middleware for the web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(roster_router, prefix="/api")
app.include_router(plan_router, prefix="/api")
app.include_router(spell_router, prefix="/api")


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    init_db()


@app.get("/")
def root():
    """Health check endpoint"""
    return {
        "name": "Bowling Strategy Lab API",
        "version": __version__,
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
