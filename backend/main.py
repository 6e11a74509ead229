from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import animals, categories, species
from api.deps import get_stores
from api.errors import install_error_handlers
from db.config import cors_origins, log_level, seed_path
from db.singleton import get_database
from seeds.loader import load_seed_file, seed_stores

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    get_database()
    path = seed_path()
    if path is not None:
        seed_stores(get_stores(), load_seed_file(path))
    logger.info("fauna atlas ready")
    yield


app = FastAPI(title="Fauna Atlas", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)
app.include_router(categories.router)
app.include_router(species.router)
app.include_router(animals.router)


@app.get("/health")
def health():
    return {"status": "ok"}
