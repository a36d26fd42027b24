from pydantic import BaseModel, ConfigDict, model_validator
from typing import Optional
from enum import Enum


class OutputFormat(str, Enum):
    txt = "txt"
    html = "html"
    conllu = "conllu"


class InputFormat(str, Enum):
    txt = "txt"
    presegmented = "presegmented"


class ProcessedResult(BaseModel):
    """
    Processed text as returned by the remote service.

    ``format`` is kept as a plain string so that dialects the renderer does
    not know about are still carried through unchanged.
    """
    model_config = ConfigDict(frozen=True)

    content: Optional[str] = None
    format: str = OutputFormat.html.value
    stats: Optional[str] = None


class DisplayOptions(BaseModel):
    show_originals: bool = True
    show_highlighting: bool = True


class ProcessRequest(BaseModel):
    text: str
    input: InputFormat = InputFormat.txt
    output: OutputFormat = OutputFormat.html
    randomize: bool = True
    classes: bool = False

    @model_validator(mode="after")
    def check_replacement_mode(self):
        if not self.text.strip():
            raise ValueError("text must not be empty")
        # randomized values and class names are alternative replacements
        if self.randomize and self.classes:
            raise ValueError("randomize and classes cannot be combined")
        return self


class ProcessBody(BaseModel):
    request: ProcessRequest
    options: Optional[DisplayOptions] = None


class DetectRequest(BaseModel):
    text: str
    input: InputFormat = InputFormat.txt
    output: OutputFormat = OutputFormat.txt


class ProcessResponse(BaseModel):
    result: ProcessedResult
    options: DisplayOptions
    rendered: str


class ServerInfo(BaseModel):
    version: Optional[str] = None
    features: Optional[str] = None
    online: bool = False
