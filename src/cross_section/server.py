"""FastAPI server for building cross-sections."""

from __future__ import annotations

import csv
import io

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import StreamingResponse

from .config import Settings
from .models import CrossSectionRequest, CrossSectionResult, IntersectedBlock, ProjectionInfo
from .pipeline import CrossSectionCache
from .projection import PROJECTIONS, validate_projection

app = FastAPI(title="Cross-Section Engine", version="0.1.0")

BLOCK_FIELDS = ["distance", "width", "height", "elevation", "rock", "color"]

_settings = Settings.from_env()
app.state.settings = _settings
app.state.cache = CrossSectionCache(maxsize=_settings.cache_size, settings=_settings)


@app.get("/projections")
async def list_projections() -> list[ProjectionInfo]:
    """Projections offered for block-model data."""
    return PROJECTIONS


@app.post("/cross-section")
def cross_section(
    section: CrossSectionRequest,
    format: str = Query("json", pattern="^(csv|json)$"),
):
    """Build the block, elevation and pit profiles for one section line.

    Returns the full result as JSON, or the intersected blocks as CSV.
    """
    code = section.line.source_projection
    if not validate_projection(code):
        raise HTTPException(status_code=400, detail=f"Unknown source projection: {code}")

    result: CrossSectionResult = app.state.cache.get_or_build(section)

    if format == "json":
        return result

    return _blocks_to_csv_response(result.blocks)


def _blocks_to_csv_response(blocks: list[IntersectedBlock]) -> StreamingResponse:
    """Convert intersected blocks to a streaming CSV response."""

    def generate():
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=BLOCK_FIELDS)
        writer.writeheader()
        yield buf.getvalue()
        buf.seek(0)
        buf.truncate(0)

        for block in blocks:
            writer.writerow(block.model_dump())
            yield buf.getvalue()
            buf.seek(0)
            buf.truncate(0)

    return StreamingResponse(
        generate(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=cross_section_blocks.csv"},
    )
