"""FastAPI main application."""

import logging
from pathlib import Path
from typing import List, Optional
import uuid

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from sqlalchemy import text
import structlog

from ..config import settings
from ..config.layer_settings import LayerConfig
from ..core.blocks import BlockState
from ..core.debug_export import DEBUG_FILENAME
from ..core.layer_generator import LayerGenerator
from ..core.world import BlockPos, ChunkPos, VoxelWorld
from ..db.connection import db
from ..db.snapshots import SnapshotStore


def configure_logging():
    """Configure structlog on top of stdlib logging."""
    logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Layer Generator API",
    description="Gradient layer generation for voxel terrain",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory worlds, keyed by world id
app.state.worlds = {}
app.state.layer_config = LayerConfig()


# Request/Response models
class ColumnStack(BaseModel):
    """A terrain column filled from the world floor up to ``height``."""

    x: int
    z: int
    height: int
    material: str = Field("minecraft:grass_block", description="Top block")
    filler: str = Field("minecraft:dirt", description="Block below the top")


class BlockPlacement(BaseModel):
    """A single voxel placed after the columns."""

    x: int
    y: int
    z: int
    block: str
    layers: Optional[int] = Field(None, ge=1, le=8)
    half: Optional[str] = Field(None, description="lower or upper, for tall plants")
    waterlogged: bool = False


class WorldCreateRequest(BaseModel):
    """Request to register an in-memory world."""

    world_id: Optional[str] = Field(None, description="World id, generated if omitted")
    bottom_y: int = Field(0, description="Lowest voxel layer")
    height: int = Field(256, ge=1, le=4096, description="World height")
    columns: List[ColumnStack] = Field(default_factory=list)
    blocks: List[BlockPlacement] = Field(default_factory=list)


class WorldResponse(BaseModel):
    world_id: str
    chunks_loaded: int
    blocks: int


class GenerateRequest(BaseModel):
    """Request to generate layers around a center column."""

    center_x: int
    center_z: int
    chunk_radius: int = Field(settings.default_chunk_radius, ge=1, le=20)
    replace_plants: bool = Field(False, description="Swap mapped plants for overlay markers")


class ChunkRequest(BaseModel):
    chunk_x: int
    chunk_z: int
    replace_plants: bool = False


class RemoveRequest(BaseModel):
    """Request to remove layers around a center column."""

    center_x: int
    center_z: int
    chunk_radius: int = Field(settings.remove_chunk_radius, ge=1, le=20)
    restore_plants: bool = Field(False, description="Put overlaid plants back")


class GenerationResponse(BaseModel):
    world_id: str
    blocks_generated: int
    plants_replaced: int
    chunks_processed: int
    duration_ms: int
    config: str


class RemovalResponse(BaseModel):
    world_id: str
    blocks_removed: int
    plants_restored: int


class LevelSummary(BaseModel):
    elevation: int
    higher: int
    edge: int
    low: int


class DebugResponse(BaseModel):
    world_id: str
    path: str
    report: str
    levels: List[LevelSummary]


def get_world(world_id: str) -> VoxelWorld:
    world = app.state.worlds.get(world_id)
    if world is None:
        raise HTTPException(status_code=404, detail="World not found")
    return world


def get_generator(world_id: str) -> LayerGenerator:
    world = get_world(world_id)
    store = SnapshotStore(db, world_id=world_id)
    return LayerGenerator(world, store, app.state.layer_config)


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    logger.info("Starting Layer Generator API")
    if not db.is_initialized:
        db.initialize()
    logger.info("API startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Layer Generator API")


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Layer Generator API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        with db.get_session() as session:
            session.execute(text("SELECT 1"))

        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error("Health check failed", error=str(e))
        raise HTTPException(status_code=503, detail="Service unhealthy")


@app.post("/worlds", response_model=WorldResponse)
def create_world(request: WorldCreateRequest):
    """Register an in-memory world built from column stacks."""
    world_id = request.world_id or str(uuid.uuid4())
    world = VoxelWorld(bottom_y=request.bottom_y, height=request.height)

    try:
        for column in request.columns:
            world.fill_column(column.x, column.z, column.height, material=column.material, filler=column.filler)
        for placement in request.blocks:
            state = BlockState(placement.block, layers=placement.layers, half=placement.half, waterlogged=placement.waterlogged)
            world.set_block_state(BlockPos(placement.x, placement.y, placement.z), state)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    app.state.worlds[world_id] = world
    logger.info("World registered", world_id=world_id, columns=len(request.columns))

    return WorldResponse(
        world_id=world_id,
        chunks_loaded=len(world.loaded_chunks()),
        blocks=len(world.blocks()),
    )


@app.get("/config")
async def get_config():
    """Show the current layer configuration."""
    config: LayerConfig = app.state.layer_config
    return {"config": config.model_dump(mode="json"), "summary": config.describe()}


@app.put("/config")
async def update_config(config: LayerConfig):
    """Replace the layer configuration used by later runs."""
    app.state.layer_config = config
    logger.info("Layer config updated", config=config.describe())
    return {"config": config.model_dump(mode="json"), "summary": config.describe()}


@app.post("/worlds/{world_id}/layers/generate", response_model=GenerationResponse)
def generate_layers(world_id: str, request: GenerateRequest):
    """Generate layers over loaded chunks around a center column."""
    generator = get_generator(world_id)

    try:
        result = generator.generate_layers(
            request.center_x, request.center_z, request.chunk_radius, request.replace_plants
        )
    except Exception as e:
        logger.error("Layer generation failed", world_id=world_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Layer generation failed: {e}")

    return GenerationResponse(
        world_id=world_id,
        blocks_generated=result.blocks_generated,
        plants_replaced=result.plants_replaced,
        chunks_processed=result.chunks_processed,
        duration_ms=result.duration_ms,
        config=generator.config.describe(),
    )


@app.post("/worlds/{world_id}/layers/chunk", response_model=GenerationResponse)
def generate_chunk(world_id: str, request: ChunkRequest):
    """Generate layers for a single chunk."""
    generator = get_generator(world_id)

    try:
        result = generator.process_chunk(ChunkPos(request.chunk_x, request.chunk_z), request.replace_plants)
    except Exception as e:
        logger.error("Chunk generation failed", world_id=world_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Chunk generation failed: {e}")

    return GenerationResponse(
        world_id=world_id,
        blocks_generated=result.blocks_generated,
        plants_replaced=result.plants_replaced,
        chunks_processed=result.chunks_processed,
        duration_ms=result.duration_ms,
        config=generator.config.describe(),
    )


@app.post("/worlds/{world_id}/layers/remove", response_model=RemovalResponse)
def remove_layers(world_id: str, request: RemoveRequest):
    """Remove layers around a center column."""
    generator = get_generator(world_id)

    try:
        result = generator.remove_layers(
            request.center_x, request.center_z, request.chunk_radius, request.restore_plants
        )
    except Exception as e:
        logger.error("Layer removal failed", world_id=world_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Layer removal failed: {e}")

    return RemovalResponse(
        world_id=world_id,
        blocks_removed=result.blocks_removed,
        plants_restored=result.plants_restored,
    )


@app.get("/worlds/{world_id}/debug", response_model=DebugResponse)
def debug_layers(
    world_id: str,
    x: int,
    z: int,
    radius: int = Query(settings.default_debug_radius, ge=1, le=10),
):
    """Export a debug report for a square around (x, z)."""
    generator = get_generator(world_id)
    output_path = Path(settings.debug_export_dir) / DEBUG_FILENAME

    try:
        report = generator.debug_export(x, z, radius, output_path=output_path)
    except Exception as e:
        logger.error("Debug export failed", world_id=world_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Debug export failed: {e}")

    return DebugResponse(
        world_id=world_id,
        path=str(output_path),
        report=report.render(),
        levels=[LevelSummary(**level) for level in report.summary()],
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
