import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.routes import assessment, monitor
from api.routes.session_loader import session
from config.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger("respiguard")

@asynccontextmanager
async def lifespan(app: FastAPI):
    for warning in settings.validate_config():
        logger.info("Configuration: %s", warning)
    if settings.AUTOSTART_SIMULATION:
        session.start()
    yield
    session.stop()

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(monitor.router)
app.include_router(assessment.router)

@app.get("/")
def root():
    return {
        "message": "RespiGuard Snow API",
        "version": settings.API_VERSION,
        "endpoints": {
            "snapshot": "/api/v1/snapshot",
            "history": "/api/v1/history?points=20",
            "tick": "/api/v1/simulation/tick",
            "assessment": "/api/v1/assessment",
            "latest_assessment": "/api/v1/assessment/latest",
            "advisor_status": "/api/v1/advisor/status",
            "docs": "/docs"
        }
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
