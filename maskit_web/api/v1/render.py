from fastapi import APIRouter
from ...schemas.render import RenderRequest, RenderResponse
from ...utils.annotation_renderer import render, render_for_display

router = APIRouter()

@router.post("/render", response_model=RenderResponse)
def render_result(request: RenderRequest) -> RenderResponse:
    """
    Apply the display toggles to a processed result (variant used for saving)
    """
    content = render(request.result, request.options)
    return RenderResponse(content=content, format=request.result.format)


@router.post("/display", response_model=RenderResponse)
def render_result_for_display(request: RenderRequest) -> RenderResponse:
    """
    Same as /render, with visible line breaks for plain text output
    """
    content = render_for_display(request.result, request.options)
    return RenderResponse(content=content, format=request.result.format)
