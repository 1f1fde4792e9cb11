# newsroom/main.py
"""
Newsroom API.

This file:
- Builds the FastAPI app around an injected Store (create_app)
- Exposes /authors and /news CRUD endpoints plus paginated listings
- Maps domain errors to 400/404/500 JSON bodies; internal detail stays in the logs
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from newsroom.config import LOG_LEVEL
from newsroom.db import Store
from newsroom.errors import (
    InternalError,
    NotFound,
    ReferentialConflict,
    ValidationFailure,
)
from newsroom.logging_utils import setup_logging
from newsroom.services import AuthorService, NewsService
from newsroom.validation import parse_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal server error"}

ENDPOINTS = {
    "authors": [
        "GET /authors",
        "GET /authors/:id",
        "POST /authors",
        "PUT /authors/:id",
        "PATCH /authors/:id",
        "DELETE /authors/:id",
    ],
    "news": [
        "GET /news",
        "GET /news/:slug",
        "POST /news",
        "PUT /news/:slug",
        "DELETE /news/:slug",
    ],
}


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailure)
    def _validation(_: Request, exc: ValidationFailure):
        return JSONResponse(status_code=400, content={"errors": exc.to_dict()})

    @app.exception_handler(RequestValidationError)
    def _bad_body(_: Request, exc: RequestValidationError):
        fields: Dict[str, Any] = {}
        for err in exc.errors():
            loc = [str(p) for p in err.get("loc", ()) if p != "body"]
            fields.setdefault(".".join(loc) or "body", []).append(err.get("msg", "Invalid value"))
        return JSONResponse(status_code=400, content={"errors": {"formErrors": [], "fieldErrors": fields}})

    @app.exception_handler(NotFound)
    def _not_found(_: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ReferentialConflict)
    def _conflict(_: Request, exc: ReferentialConflict):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(InternalError)
    def _internal(request: Request, exc: InternalError):
        logger.error("internal error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)

    @app.middleware("http")
    async def _unexpected(request: Request, call_next):
        # anything the handlers above did not claim (sqlite errors, bugs)
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)


def create_app(store: Optional[Store] = None) -> FastAPI:
    store = store or Store()
    authors = AuthorService(store)
    news = NewsService(store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        setup_logging(LOG_LEVEL)
        store.ensure_schema()
        logger.info("newsroom ready (db=%s)", store.db_path)
        yield

    app = FastAPI(title="Newsroom", lifespan=lifespan)
    app.state.store = store
    _register_error_handlers(app)

    @app.get("/")
    def _index():
        return {"endpoints": ENDPOINTS}

    @app.get("/health")
    @app.get("/healthz")
    def _health():
        return {"status": "ok"}

    # --- authors ---
    @app.get("/authors")
    def _list_authors(limit: Optional[str] = Query(None), offset: Optional[str] = Query(None)):
        return authors.list(limit, offset)

    @app.get("/authors/{author_id}")
    def _get_author(author_id: str):
        return authors.get(parse_id(author_id))

    @app.post("/authors", status_code=201)
    def _create_author(payload: Dict[str, Any]):
        return authors.create(payload)

    @app.put("/authors/{author_id}")
    @app.patch("/authors/{author_id}")
    def _update_author(author_id: str, payload: Dict[str, Any]):
        return authors.update(parse_id(author_id), payload)

    @app.delete("/authors/{author_id}", status_code=204)
    def _delete_author(author_id: str):
        authors.delete(parse_id(author_id))
        return Response(status_code=204)

    # --- news ---
    @app.get("/news")
    def _list_news(limit: Optional[str] = Query(None), offset: Optional[str] = Query(None)):
        return news.list(limit, offset)

    @app.get("/news/{slug}")
    def _get_news(slug: str):
        return news.get(slug)

    @app.post("/news", status_code=201)
    def _create_news(payload: Dict[str, Any]):
        return news.create(payload)

    @app.put("/news/{slug}")
    def _update_news(slug: str, payload: Dict[str, Any]):
        return news.update(slug, payload)

    @app.delete("/news/{slug}", status_code=204)
    def _delete_news(slug: str):
        news.delete(slug)
        return Response(status_code=204)

    return app


app = create_app()


# Local run helper
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("newsroom.main:app", host="127.0.0.1", port=3000)
