import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from imageproc.config import Config, config
from imageproc.db.session import connect_mongo, close_mongo
from imageproc.errors import register_exception_handlers
from imageproc.routers import register_routers
from imageproc.utils.files import configure_io_limit

logger = logging.getLogger(__name__)


def create_app(settings: Config = config) -> FastAPI:
    upload_dir = settings.UPLOAD_DIR.resolve()
    upload_dir.mkdir(parents=True, exist_ok=True)
    settings = settings.model_copy(update={"UPLOAD_DIR": upload_dir})
    configure_io_limit(settings.MAX_CONCURRENT_IO)

    @contextlib.asynccontextmanager
    async def lifespan(app_: FastAPI):
        await connect_mongo(app_, settings)
        logger.info("Serving uploads from %s", upload_dir)
        yield
        close_mongo(app_)

    app = FastAPI(title="Image Processor", lifespan=lifespan)
    app.state.config = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routers(app)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    return app
