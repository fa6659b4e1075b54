from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from cars import router as cars_router
from core import db, errors, log, settings
from motorbikes import router as motorbikes_router

log.configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="vehicle-catalog", version=settings.app_version(), lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)

errors.register_exception_handlers(app)

app.include_router(auth_router.router, tags=["auth"])
app.include_router(cars_router.router, tags=["cars"])
app.include_router(motorbikes_router.router, tags=["motorbikes"])


@app.get("/v1/healthcheck")
def healthcheck() -> dict:
    return {
        "status": "available",
        "system_info": {
            "environment": settings.app_env(),
            "version": settings.app_version(),
        },
    }
