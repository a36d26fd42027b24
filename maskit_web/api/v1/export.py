from fastapi import APIRouter, HTTPException, Response
from ...schemas.render import RenderRequest
from ...schemas.result import ProcessedResult, OutputFormat
from ...utils.annotation_renderer import render

router = APIRouter()

KNOWN_EXTENSIONS = {f.value for f in OutputFormat}

@router.post("/output")
def export_output(request: RenderRequest):
    """
    Download the processed text as shown, without display-only markup
    """
    if not request.result.content:
        raise HTTPException(status_code=404, detail="No output to save")

    content = render(request.result, request.options)

    output_format = request.result.format
    media_type = "text/html" if output_format == OutputFormat.html else "text/plain"
    # The format comes from the client, only known ones make it into the filename
    extension = output_format if output_format in KNOWN_EXTENSIONS else OutputFormat.txt.value

    return Response(
        content=content,
        media_type=media_type,
        headers={'Content-Disposition': f'attachment; filename="citations.{extension}"'}
    )


@router.post("/stats")
def export_stats(result: ProcessedResult):
    """
    Download the statistics overview returned with the result
    """
    if not result.stats:
        raise HTTPException(status_code=404, detail="No statistics to save")

    return Response(
        content=result.stats,
        media_type='text/html',
        headers={'Content-Disposition': 'attachment; filename="statistics.html"'}
    )
