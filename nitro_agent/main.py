from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import health, nitro
from .config import settings
from .logging_config import setup_logging

setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Nitro Agent API",
    description="RouterNitro bridge and swap quote assistant",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(nitro.router, tags=["Nitro"])


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "name": "Nitro Agent API",
        "version": __version__,
        "description": "RouterNitro bridge and swap quote assistant",
        "docs": "/docs",
        "health": "/healthz"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "nitro_agent.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
