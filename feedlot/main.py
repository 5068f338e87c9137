from fastapi import FastAPI

from feedlot.db import Base, SessionLocal, engine
from feedlot.api.api_v1.api import api_router
import feedlot.models
from feedlot.core.config import settings
from feedlot.core.logging import get_logger, setup_logging

logger = get_logger(module="main")

app = FastAPI(title=settings.PROJECT_NAME)

app.include_router(api_router, prefix="/api/v1")

@app.on_event("startup")
def on_startup():
    setup_logging()
    # Crea las tablas si no existen (y el fichero sqlite)
    Base.metadata.create_all(bind=engine)

    if settings.SEED_SAMPLE_DATA:
        from feedlot.seed_data import seed_all

        db = SessionLocal()
        try:
            seed_all(db)
        finally:
            db.close()
        logger.info("Datos de ejemplo cargados")


@app.get("/", tags=["health"])
def read_root():
    return {"message": "ok"}
