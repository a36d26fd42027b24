from fastapi import APIRouter, HTTPException
import logging
from ...schemas.result import (
    DetectRequest,
    DisplayOptions,
    ProcessBody,
    ProcessResponse,
    ProcessedResult,
    ServerInfo,
)
from ...core.exceptions import MaskitServiceError
from ...core.maskit_client import maskit_client, describe_error
from ...utils.annotation_renderer import render_for_display

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/", response_model=ProcessResponse)
def process_text(body: ProcessBody) -> ProcessResponse:
    """
    Send text to MasKIT and return the result with its display variant
    """
    options = body.options or DisplayOptions()

    try:
        result = maskit_client.process(body.request)
    except MaskitServiceError as e:
        raise HTTPException(status_code=502, detail=describe_error(e))

    return ProcessResponse(
        result=result,
        options=options,
        rendered=render_for_display(result, options),
    )


@router.get("/info", response_model=ServerInfo)
def server_info() -> ServerInfo:
    """
    Version and features of the MasKIT service; reports offline instead of failing
    """
    try:
        return maskit_client.info()
    except MaskitServiceError as e:
        logger.warning(f"MasKIT info unavailable: {e}")
        return ServerInfo(online=False)


@router.post("/detect", response_model=ProcessedResult)
def detect_sources(request: DetectRequest) -> ProcessedResult:
    """
    Detect and classify sources with SouDeC
    """
    try:
        return maskit_client.detect(request.text, request.input, request.output)
    except MaskitServiceError as e:
        raise HTTPException(status_code=502, detail=describe_error(e))
