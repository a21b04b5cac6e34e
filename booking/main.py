import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI

from booking.config import settings
from booking.database import Database
from booking.presentation.api import router
from booking.presentation.errors import register_exception_handlers

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    database = Database(settings.DATABASE_URL)
    await database.connect()
    app.state.database = database
    logger.info("Приложение запущено")

    yield

    logger.info("Приложение останавливается...")
    await database.disconnect()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Booking Service",
        description="Заказы транспорта и туров, платежи и аутентификация",
        version="1.0.0",
        lifespan=lifespan
    )
    register_exception_handlers(app)
    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("booking.main:app", host="0.0.0.0", port=8000)
