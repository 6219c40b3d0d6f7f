"""
FastAPI server for world data.

Serves generated worlds to renderers: the JSON world structure, a
top-down map image and analysis statistics.
"""

import argparse
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field
import uvicorn

from .. import __version__
from ..config import WorldConfig, WorldConfigError, load_config
from ..compatibility import WorldAdapter
from ..engine import WorldComposer, WorldAnalyzer
from ..procgen.rng import parse_seed_text
from ..render import MapRenderer


# Pydantic models for API
class PointModel(BaseModel):
    x: float
    z: float


class PatchModel(BaseModel):
    x: float
    z: float
    r: float
    color: int


class PathModel(BaseModel):
    width: float
    points: List[PointModel]


class LandmarkModel(BaseModel):
    id: str
    name: str
    type: str
    x: float
    z: float


class TreeModel(BaseModel):
    x: float
    z: float
    scale: float


class WorldResponse(BaseModel):
    bounds: float
    patches: List[PatchModel]
    paths: List[PathModel]
    landmarks: List[LandmarkModel]
    trees: Optional[List[TreeModel]] = None
    seed: Optional[int] = None
    world_size: Optional[float] = None


class WorldRequest(BaseModel):
    seed: Union[int, str, None] = Field("default", description="World seed (string or integer)")
    include_trees: bool = Field(True, description="Include tree scatter in the response")
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Configuration overrides, same keys as WorldConfig"
    )


class HealthResponse(BaseModel):
    status: str
    version: str
    default_seed: Union[int, str, None]


def create_app(
    config: Optional[WorldConfig] = None,
    cors_origins: List[str] = None
) -> FastAPI:
    """Create FastAPI application."""

    base_config = config if config is not None else WorldConfig()
    composer = WorldComposer(base_config)
    composer.validate()

    app = FastAPI(
        title="Trailgen API",
        description="Deterministic outdoor world generation for 3D and map renderers",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS
    if cors_origins is None:
        cors_origins = ["*"]  # Allow all origins for development

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    adapter = WorldAdapter()

    def _generate(seed: Union[int, str, None], include_trees: bool = True, cfg: WorldConfig = base_config):
        target = composer if cfg is base_config else WorldComposer(cfg)
        try:
            return target.generate(seed=seed, include_trees=include_trees)
        except WorldConfigError as e:
            raise HTTPException(status_code=422, detail=e.errors)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__, default_seed=base_config.seed)

    @app.get("/world", response_model=WorldResponse, response_model_exclude_none=True)
    async def get_world(
        seed: str = Query("default", description="World seed; digit strings are integer seeds"),
        include_trees: bool = Query(True, description="Include tree scatter")
    ):
        """Generate a world with the server configuration."""
        world = _generate(parse_seed_text(seed), include_trees)
        return adapter.to_dict(world, include_scatter=include_trees)

    @app.post("/world", response_model=WorldResponse, response_model_exclude_none=True)
    async def post_world(request: WorldRequest):
        """Generate a world with configuration overrides."""

        cfg = base_config
        if request.config:
            merged = {**base_config.to_dict(), **request.config}
            try:
                cfg = WorldConfig.from_dict(merged)
            except WorldConfigError as e:
                raise HTTPException(status_code=422, detail=e.errors)

        world = _generate(request.seed, request.include_trees, cfg)
        return adapter.to_dict(world, include_scatter=request.include_trees)

    @app.get("/world/map.png")
    async def get_map(
        seed: str = Query("default", description="World seed"),
        width: int = Query(900, ge=64, le=4096, description="Image width"),
        height: int = Query(700, ge=64, le=4096, description="Image height")
    ):
        """Top-down map of the world. The player is not shown."""
        world = _generate(parse_seed_text(seed), include_trees=False)
        png = MapRenderer(width=width, height=height).to_png_bytes(world)
        return Response(content=png, media_type="image/png")

    @app.get("/world/stats")
    async def get_stats(seed: str = Query("default", description="World seed")):
        """Analysis of the generated world, including the bounds report."""
        world = _generate(parse_seed_text(seed))
        return WorldAnalyzer(base_config.corridors).analyze(world)

    return app


def main():
    """CLI entry point for API server."""

    parser = argparse.ArgumentParser(description="Trailgen API Server")
    parser.add_argument("--config", help="JSON world configuration file")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind server")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind server")

    args = parser.parse_args()

    try:
        config = load_config(args.config) if args.config else WorldConfig()
        app = create_app(config=config)
    except (WorldConfigError, OSError, ValueError) as e:
        print(f"Error: {e}")
        return

    print(f"Starting Trailgen API server...")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level="info"
    )


if __name__ == "__main__":
    main()
