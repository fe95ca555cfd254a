from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import cors_origins, get_store
from api.routes.pages import router as pages_router
from api.routes.snapshots import router as snapshots_router


def create_app() -> FastAPI:
    app = FastAPI(title="Markupbook API", version="0.1.0")
    # No cookies or auth are involved, so credentials stay off and the
    # browser only needs If-Match on the way in and ETag on the way out.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["Content-Type", "If-Match"],
        expose_headers=["ETag"],
    )

    app.include_router(pages_router)
    app.include_router(snapshots_router)

    @app.get("/healthz")
    def health() -> dict:
        # Reading the notebook also creates its directory, so this fails
        # when the notebook location is not usable.
        store = get_store()
        return {"status": "ok", "pages": len(store.list_pages())}

    return app


app = create_app()
