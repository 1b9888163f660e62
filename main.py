"""
AI Creative Builder - FastAPI Application
"""

from fastapi import FastAPI, HTTPException, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from pathlib import Path
from loguru import logger
from PIL import Image
import numpy as np
import sys

from config import settings
from modules import (
    LayoutEngine,
    QuoteResolver,
    Renderer,
    ComplianceChecker,
    PlatformExporter,
    AssetStore,
    BackgroundRemover,
)
from modules.descriptor import LayoutDescriptor
from modules.design_tables import Objective, Tone
from modules.quotes import detect_ai_theme
from utils.exceptions import AssetNotFoundError, UnsupportedPlatformError, UploadRejectedError

# Configure logging
logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)
logger.add(settings.LOGS_DIR / "app.log", rotation="500 MB", retention="10 days", level="DEBUG")

# Initialize FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description="Generative ad creative layouts with rendering, compliance checks and platform export"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Serve uploaded assets and rendered creatives
app.mount("/uploads", StaticFiles(directory=str(settings.UPLOADS_DIR)), name="uploads")
app.mount("/exports", StaticFiles(directory=str(settings.EXPORTS_DIR)), name="exports")

# Services
layout_engine = LayoutEngine()
quote_resolver = QuoteResolver()
renderer = Renderer()
compliance_checker = ComplianceChecker()
exporter = PlatformExporter()
asset_store = AssetStore()
background_remover = BackgroundRemover()


# Request/Response Models
class StatusResponse(BaseModel):
    """Status response model"""
    status: str
    message: str


class GenerateVariantsRequest(BaseModel):
    """Request model for layout variant generation"""
    assets: List[Dict[str, Any]] = Field(default_factory=list, description="Uploaded assets; the first is the main image, the second the logo")
    tone: Optional[str] = Field(None, description="neutral, bold, playful or premium")
    objective: Optional[str] = Field(None, description="awareness, conversion or sales")
    format: Optional[str] = Field(None, description="square, story or banner")
    count: int = Field(settings.DEFAULT_VARIANT_COUNT, ge=1, description="Number of variants")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Optional description/title/tags")


class GenerateQuotesRequest(BaseModel):
    """Request model for banner quote generation"""
    tone: Optional[str] = None
    objective: Optional[str] = None
    assets: List[Dict[str, Any]] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    count: int = Field(settings.DEFAULT_QUOTE_COUNT, ge=1, description=f"Number of quotes (capped at {settings.MAX_QUOTE_COUNT})")


class RenderVariantRequest(BaseModel):
    """Request model for rendering one variant"""
    variant: Dict[str, Any]
    assets: List[Dict[str, Any]]
    bg_remove: bool = False
    tone: Optional[str] = None
    objective: Optional[str] = None
    format: Optional[str] = None


class AutoFixRequest(BaseModel):
    """Request model for contrast auto-fix"""
    image_url: str


class ExportRequest(BaseModel):
    """Request model for platform export"""
    image_url: str
    platform: str
    format: Optional[str] = None


class PlatformTarget(BaseModel):
    platform: str
    format: Optional[str] = None


class ExportBatchRequest(BaseModel):
    """Request model for multi-platform export"""
    image_url: str
    platforms: List[PlatformTarget]


def _variant_response(index: int, layout: LayoutDescriptor, main_asset: Dict) -> Dict:
    """
    Wrap a layout descriptor in the variant shape the client expects

    Args:
        index: Variant position
        layout: Normalized layout
        main_asset: Asset used as the main image

    Returns:
        Variant dict
    """
    width = layout.canvas_size.width
    height = layout.canvas_size.height

    return {
        "id": layout.id,
        "layout": index,
        "template": "generative",
        "template_config": {
            "main_x": layout.main_asset.x / width,
            "main_y": layout.main_asset.y / height,
            "main_width": layout.main_asset.width / width,
            "text_x": layout.text_overlay.rect.x / width,
            "text_y": layout.text_overlay.rect.y / height,
        },
        "generative_layout": layout.to_dict(),
        "main_asset": main_asset,
        "tone": layout.tone,
        "objective": layout.objective,
        "format": layout.format,
        "description": layout_engine.describe(layout),
    }


# API Endpoints
@app.get("/api/health", response_model=StatusResponse)
async def health():
    """Health check endpoint"""
    return StatusResponse(
        status="ok",
        message="AI Creative Builder API is running"
    )


@app.post("/api/upload")
def upload_assets(files: List[UploadFile] = File(...)):
    """
    Upload product images and logos

    Args:
        files: Image files (max 10, 10 MB each)

    Returns:
        Stored assets
    """
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    if len(files) > settings.MAX_UPLOAD_FILES:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files. Maximum is {settings.MAX_UPLOAD_FILES} files."
        )

    stored = []
    try:
        for f in files:
            stored.append(asset_store.save_upload(f.filename, f.content_type, f.file))

        logger.info(f"Upload successful, returning {len(stored)} files")

        return {"files": [asset.to_dict() for asset in stored]}

    except UploadRejectedError as e:
        asset_store.discard(stored)
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        asset_store.discard(stored)
        logger.error(f"Upload failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/background-remove")
async def remove_background(image: UploadFile = File(...)):
    """
    Remove the background of an uploaded image

    Args:
        image: Image file

    Returns:
        Original and processed URLs with the method used
    """
    try:
        stored = asset_store.save_upload(image.filename, image.content_type, image.file)
        return await background_remover.remove(Path(stored.path))

    except UploadRejectedError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        logger.error(f"Background removal error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/generate-variants")
async def generate_variants(request: GenerateVariantsRequest):
    """
    Generate AI-optimized layout variants

    Args:
        request: Assets plus tone/objective/format

    Returns:
        Variants with their full layout descriptors
    """
    if not request.assets:
        raise HTTPException(status_code=400, detail="No assets provided")

    try:
        layouts = layout_engine.generate_variants(
            tone=request.tone,
            objective=request.objective,
            format=request.format,
            asset_count=len(request.assets),
            has_logo=len(request.assets) > 1,
            count=request.count,
            assets=request.assets,
            metadata=request.metadata,
        )

        variants = [
            _variant_response(i, layout, request.assets[0])
            for i, layout in enumerate(layouts)
        ]

        return {"variants": variants}

    except Exception as e:
        logger.error(f"Variant generation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/generate-quotes")
async def generate_quotes(request: GenerateQuotesRequest):
    """
    Generate banner quote variations

    Args:
        request: Tone/objective, optional assets and metadata, count

    Returns:
        Quotes with the resolved tone and objective
    """
    try:
        count = min(request.count, settings.MAX_QUOTE_COUNT)
        is_ai_themed = detect_ai_theme(request.assets, request.metadata)

        quotes = quote_resolver.generate_quotes(
            request.tone,
            request.objective,
            is_ai_themed=is_ai_themed,
            count=count,
        )

        return {
            "quotes": quotes,
            "tone": Tone.coerce(request.tone).value,
            "objective": Objective.coerce(request.objective).value,
            "count": len(quotes),
        }

    except Exception as e:
        logger.error(f"Quote generation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/render-variant")
def render_variant(request: RenderVariantRequest):
    """
    Render a variant to PNG and run compliance checks

    Args:
        request: Variant (with generative_layout), assets and options

    Returns:
        Rendered image URL and violations
    """
    if not request.variant or not request.assets:
        raise HTTPException(status_code=400, detail="Missing required data")

    try:
        generative_layout = request.variant.get("generative_layout")
        if generative_layout:
            try:
                layout = LayoutDescriptor.from_dict(generative_layout)
            except (KeyError, TypeError) as e:
                raise HTTPException(status_code=400, detail=f"Invalid generative_layout: {e}")
        else:
            layout = layout_engine.resolve(
                tone=request.tone,
                objective=request.objective,
                format=request.format,
                has_logo=len(request.assets) > 1,
                assets=request.assets,
                asset_count=len(request.assets),
            )

        main_asset = request.variant.get("main_asset") or request.assets[0]
        main_path = asset_store.resolve(main_asset.get("src", ""))

        logo_path = None
        if len(request.assets) > 1:
            try:
                logo_path = asset_store.resolve(request.assets[1].get("src", ""))
            except AssetNotFoundError as e:
                logger.warning(f"Logo skipped: {e.message}")

        image = renderer.render(layout, main_path, logo_path=logo_path, bg_remove=request.bg_remove)
        filename = asset_store.save_render(image)

        violations = compliance_checker.check(
            np.asarray(image),
            layout=layout,
            has_logo=logo_path is not None and layout.logo is not None,
            format=layout.format,
        )

        return {
            "success": True,
            "image_url": f"/exports/{filename}",
            "violations": [v.to_dict() for v in violations],
        }

    except HTTPException:
        raise
    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Render error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/auto-fix")
def auto_fix(request: AutoFixRequest):
    """
    Darken the text band of a rendered creative and re-check it

    Args:
        request: URL of a rendered creative

    Returns:
        Fixed image URL and remaining violations
    """
    try:
        source_path = asset_store.resolve(request.image_url, kind="exports")

        with Image.open(source_path) as source:
            fixed = renderer.apply_contrast_fix(source)

        filename = asset_store.save_render(fixed, prefix="fixed")
        violations = compliance_checker.check(np.asarray(fixed))

        return {
            "success": True,
            "image_url": f"/exports/{filename}",
            "violations": [v.to_dict() for v in violations],
        }

    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Auto-fix error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/export-platform")
def export_platform(request: ExportRequest):
    """
    Export a creative at a platform's size

    Args:
        request: Image URL, platform and platform format

    Returns:
        Export result
    """
    try:
        source_path = asset_store.resolve(request.image_url, kind="exports")
        return exporter.export(source_path, request.platform, request.format)

    except UnsupportedPlatformError as e:
        raise HTTPException(status_code=400, detail={"error": e.message, "available": e.available})
    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Platform export error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/export-batch")
def export_batch(request: ExportBatchRequest):
    """
    Export a creative for several platforms at once

    Args:
        request: Image URL and platform targets

    Returns:
        Per-target results with totals
    """
    try:
        source_path = asset_store.resolve(request.image_url, kind="exports")
        targets = [target.model_dump() for target in request.platforms]
        return exporter.export_batch(source_path, targets)

    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Batch export error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.delete("/api/assets/{filename}", response_model=StatusResponse)
def delete_asset(filename: str):
    """
    Delete an uploaded asset

    Args:
        filename: Stored filename

    Returns:
        Status response
    """
    try:
        asset_store.delete(filename)
        return StatusResponse(
            status="success",
            message="Asset deleted"
        )

    except AssetNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete: {str(e)}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True
    )
