import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import Session

from .api.exceptions import register_exception_handlers
from .api.routes import router as accounts_router, transfer_router
from .core.config import get_settings
from .core import db as core_db
from .services.seed import seed_sql_demo_data

settings = get_settings()
logging.basicConfig(level=settings.log_level)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.backend == "sql":
        core_db.init_db()
        if settings.seed_demo_data:
            with Session(core_db.get_engine()) as session:
                seed_sql_demo_data(session)
    yield

app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.include_router(accounts_router)
app.include_router(transfer_router)
register_exception_handlers(app)

@app.get("/health")
def read_health() -> dict[str, str]:
    return {"status": "ok"}
