import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resource_planner import __version__
from resource_planner.config import get_settings
from resource_planner.api.errors import register_exception_handlers
from resource_planner.api.routes import resources, patterns, availability_exceptions, timeline, data_io

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="API for resource availability, weekly patterns and cost timelines",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(resources.router, prefix="/api/resources", tags=["Resources"])
app.include_router(patterns.router, prefix="/api", tags=["Weekly Patterns"])
app.include_router(
    availability_exceptions.router, prefix="/api/availability-exceptions", tags=["Availability Exceptions"]
)
app.include_router(timeline.router, prefix="/api/timeline", tags=["Timeline"])
app.include_router(data_io.router, prefix="/api/data", tags=["Data Import/Export"])


@app.get("/")
async def root():
    return {"message": "Resource Planner API", "version": __version__}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
