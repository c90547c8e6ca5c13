import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topposts.api.top import router as top_router
from topposts.core.settings import Settings, settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    # httpx logs every request at INFO; the source already logs each listing fetch.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(cfg: Settings = settings) -> FastAPI:
    api = FastAPI(title=cfg.app_name, version="0.1.0")
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @api.get("/healthz")
    def healthz() -> dict:
        return {"ok": True, "env": cfg.app_env, "reddit_base_url": cfg.reddit_base_url}

    api.include_router(top_router)
    return api


configure_logging(settings.log_level)
app = create_app()


def run() -> None:
    logger.info("starting %s env=%s on %s:%s", settings.app_name, settings.app_env, settings.app_host, settings.app_port)
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_config=None)


if __name__ == "__main__":
    run()
