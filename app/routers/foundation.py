import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import (
    INTERNAL_MATCH_ERROR_MESSAGE,
    ImageTooLargeError,
    ShadeMatchException,
)
from app.schemas.foundation import ErrorPayload, MatchResult, PixelSample, ShadeOut, Undertone
from app.services.catalog_service import get_shade, list_shades, to_shade_out
from app.services.logic.shade_matcher import shade_matcher
from app.services.pixel_sampler import sample_pixel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/foundation-match", tags=["Foundation Matching"])


@router.post(
    "",
    response_model=MatchResult,
    responses={400: {"model": ErrorPayload}, 500: {"model": ErrorPayload}},
)
async def match_foundation(payload: Any = Body(default=None)):
    """
    Ranks the shade catalog against one sampled skin colour.
    Body: {"rgb": [r, g, b]}. Out-of-range channels are clamped.
    """
    try:
        return shade_matcher.match_request(payload)
    except ShadeMatchException:
        raise
    except Exception as e:
        logger.exception(f"Foundation matching error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_MATCH_ERROR_MESSAGE
        )


@router.get("/shades", response_model=List[ShadeOut])
async def get_shades(undertone: Optional[Undertone] = None):
    """Lists the catalog in ranking order, optionally for one undertone family."""
    return [to_shade_out(shade) for shade in list_shades(undertone)]


@router.get("/shades/{name}", response_model=ShadeOut, responses={404: {"model": ErrorPayload}})
async def get_shade_by_name(name: str):
    return to_shade_out(get_shade(name))


@router.post(
    "/sample",
    response_model=PixelSample,
    responses={400: {"model": ErrorPayload}, 413: {"model": ErrorPayload}},
)
async def sample_uploaded_pixel(
    file: UploadFile = File(...),
    x: int = Form(...),
    y: int = Form(...),
    radius: int = Form(0, ge=0, le=settings.MAX_SAMPLE_RADIUS),
):
    """
    Reads the colour of one pixel (or a small averaged patch) from an uploaded photo.
    The returned rgb can be posted straight to /foundation-match.
    """
    data = await file.read()
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise ImageTooLargeError(len(data), settings.MAX_UPLOAD_BYTES)

    # Decoding is CPU bound, keep it off the event loop
    return await run_in_threadpool(sample_pixel, data, x, y, radius, file.filename)
