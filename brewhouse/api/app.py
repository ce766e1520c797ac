"""HTTP surface of the brewhouse monitor."""
from __future__ import annotations
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from brewhouse.core.exceptions import BrewhouseError, NotFound
from brewhouse.orchestration import BrewhouseOrchestrator


logger = logging.getLogger(__name__)


class BeerIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    is_active: bool = Field(False, alias="isActive")


class BeerUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    is_active: Optional[bool] = Field(None, alias="isActive")


def create_app(config, orchestrator: Optional[BrewhouseOrchestrator] = None) -> FastAPI:
    """Build the FastAPI application around one orchestrator instance."""
    orch = orchestrator or BrewhouseOrchestrator(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not await orch.startup():
            await orch.shutdown()
            raise BrewhouseError("brewhouse startup failed, see log for details")
        try:
            yield
        finally:
            await orch.shutdown()

    app = FastAPI(title="Brewhouse Monitor", lifespan=lifespan)
    app.state.orchestrator = orch
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BrewhouseError)
    async def brewhouse_error(request: Request, exc: BrewhouseError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code,
                            content={"error": type(exc).__name__, "message": str(exc)})

    # ------------------------------------------------------------------ #
    #  Health
    # ------------------------------------------------------------------ #
    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "sampler": orch.sampler.get_stats(),
        }

    # ------------------------------------------------------------------ #
    #  Telemetry
    # ------------------------------------------------------------------ #
    @app.get("/api/sensor-data/{process}")
    def sensor_data(process: str) -> Dict[str, Any]:
        return orch.queries.current(process)

    @app.get("/api/live/{process}")
    async def live(process: str) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in await orch.queries.live(process)]

    @app.get("/api/history/{process}/{day}")
    async def history(process: str, day: str) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in await orch.queries.history(process, day)]

    # ------------------------------------------------------------------ #
    #  Beer catalog (active route must precede /api/beer/{beer_id})
    # ------------------------------------------------------------------ #
    @app.post("/api/beer", status_code=201)
    async def create_beer(beer: BeerIn) -> Dict[str, Any]:
        created = await orch.catalog.create(**beer.model_dump())
        return created.to_dict()

    @app.get("/api/beers")
    async def list_beers() -> List[Dict[str, Any]]:
        return [b.to_dict() for b in await orch.catalog.list()]

    @app.get("/api/beer/active")
    async def active_beer() -> Dict[str, Any]:
        return (await orch.catalog.active()).to_dict()

    @app.get("/api/beer/{beer_id}")
    async def get_beer(beer_id: int) -> Dict[str, Any]:
        return (await orch.catalog.get(beer_id)).to_dict()

    @app.put("/api/beer/{beer_id}")
    async def update_beer(beer_id: int, changes: BeerUpdate) -> Dict[str, Any]:
        updated = await orch.catalog.update(beer_id, **changes.model_dump(exclude_unset=True))
        return updated.to_dict()

    @app.delete("/api/beer/{beer_id}")
    async def delete_beer(beer_id: int) -> Dict[str, Any]:
        await orch.catalog.delete(beer_id)
        return {"message": "Beer deleted successfully"}

    # ------------------------------------------------------------------ #
    #  Reviews
    # ------------------------------------------------------------------ #
    @app.post("/api/review/{beer_name}", status_code=201)
    async def submit_review(beer_name: str,
                            payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
        await orch.reviews.submit(beer_name, (payload or {}).get("sterne"))
        return {"message": "Review submitted"}

    @app.get("/api/review/{beer_name}")
    async def review_summary(beer_name: str) -> Dict[str, Any]:
        return (await orch.reviews.summary(beer_name)).to_dict()

    _mount_frontend(app, config.static_dir)
    return app


def _mount_frontend(app: FastAPI, static_dir: Optional[str]) -> None:
    """Serve the built dashboard; unknown non-API paths fall back to index.html."""
    if not static_dir or not os.path.isdir(static_dir):
        logger.info("no frontend build at %s, serving API only", static_dir)
        return
    root = os.path.realpath(static_dir)
    index = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    def frontend(full_path: str):
        if full_path.startswith("api/"):
            raise NotFound(f"No API route: /{full_path}")
        candidate = os.path.realpath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        if not os.path.isfile(index):
            raise NotFound("Frontend build has no index.html")
        return FileResponse(index)
