from fastapi import FastAPI

from equip_bridge.api.v1.router import router as v1_router
from equip_bridge.config import get_settings
from equip_bridge.log import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.include_router(v1_router, prefix="/v1")
    return app


app = create_app()
