"""
Purpose:
- FastAPI application factory and router mounts.
- Adds CORS for the browser front-end.
- Maps pipeline stage failures to HTTP errors (503 config, 502 upstream).
- Uvicorn will serve this on 0.0.0.0:3000 by default.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .core.errors import ScentFinderError, SearchConfigError
from .core.settings import settings
from .api.health import router as health_router
from .api.search import router as search_router

logger = logging.getLogger(__name__)

async def _pipeline_error(request: Request, exc: ScentFinderError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    status = 503 if isinstance(exc, SearchConfigError) else 502
    return JSONResponse(status_code=status, content={"detail": str(exc)})

def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Scent Finder API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ScentFinderError, _pipeline_error)
    app.include_router(health_router)
    app.include_router(search_router)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
