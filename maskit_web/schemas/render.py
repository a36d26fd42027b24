from pydantic import BaseModel
from typing import Optional
from .result import ProcessedResult, DisplayOptions

class RenderRequest(BaseModel):
    result: ProcessedResult
    options: Optional[DisplayOptions] = None

class RenderResponse(BaseModel):
    content: str
    format: str
