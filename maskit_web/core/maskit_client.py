"""
Client for the remote MasKIT and SouDeC REST services.

Requests are sent as form data, the same way the web page submits them,
and the JSON answers are turned into :class:`ProcessedResult` /
:class:`ServerInfo` values. There is no retry: a failed call is reported
once and the caller decides what to show.
"""
import logging
import threading
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .config import settings
from .exceptions import MaskitServiceError, ServiceResponseError, ServiceUnavailableError
from ..schemas.result import (
    InputFormat,
    OutputFormat,
    ProcessRequest,
    ProcessedResult,
    ServerInfo,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class MaskitClient:
    """
    Parameters
    ----------
    base_url : str
        MasKIT API root, e.g. ``https://quest.ms.mff.cuni.cz/maskit/api``.
    soudec_url : str
        SouDeC API root used by :meth:`detect`.
    timeout : float
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        soudec_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or settings.MASKIT_API_URL).rstrip("/")
        self.soudec_url = (soudec_url or settings.SOUDEC_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        # API routes run in a threadpool, so each worker thread gets its own session
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def process(self, request: ProcessRequest) -> ProcessedResult:
        """
        Anonymize ``request.text`` and return the marked-up result
        """
        data = build_form_data(request)
        url = f"{self.base_url}/process"
        payload = self._post(url, data)
        return _to_model(
            url,
            ProcessedResult,
            content=payload.get("result"),
            format=request.output.value,
            stats=payload.get("stats"),
        )

    def info(self) -> ServerInfo:
        """
        Ask the service for its version and supported features
        """
        url = f"{self.base_url}/info"
        payload = self._post(url, {"info": ""})
        return _to_model(
            url,
            ServerInfo,
            version=payload.get("version"),
            features=payload.get("features"),
            online=True,
        )

    def detect(
        self,
        text: str,
        input_format: InputFormat = InputFormat.txt,
        output_format: OutputFormat = OutputFormat.txt,
    ) -> ProcessedResult:
        """
        Detect and classify cited sources with SouDeC
        """
        data = {"text": text, "input": input_format.value, "output": output_format.value}
        url = f"{self.soudec_url}/detect"
        payload = self._post(url, data)
        return _to_model(
            url,
            ProcessedResult,
            content=payload.get("result"),
            format=output_format.value,
            stats=payload.get("stats"),
        )

    def _post(self, url: str, data: Dict[str, str]) -> Dict[str, Any]:
        logger.debug(f"POST {url} ({len(data.get('text', ''))} characters of text)")
        try:
            response = self.session.post(url, data=data, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise ServiceUnavailableError(f"Could not reach {url}: {e}") from e

        if not response.ok:
            logger.error(f"{url} returned HTTP {response.status_code}")
            raise ServiceResponseError(
                f"{url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                response_text=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"{url} returned a body that is not JSON")
            raise ServiceResponseError(
                f"{url} returned invalid JSON",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

        if not isinstance(payload, dict):
            raise ServiceResponseError(
                f"{url} returned unexpected JSON",
                status_code=response.status_code,
                response_text=response.text,
            )
        return payload


def _to_model(url: str, model: Type[ModelT], **fields: Any) -> ModelT:
    """
    Build a result model from response fields, treating type mismatches as a bad response
    """
    try:
        return model(**fields)
    except ValidationError as e:
        logger.error(f"{url} returned fields of unexpected type: {e}")
        raise ServiceResponseError(f"{url} returned unexpected JSON") from e


def build_form_data(request: ProcessRequest) -> Dict[str, str]:
    """
    Form fields for the process call.

    ``randomize`` and ``classes`` are flags: the service only checks for
    their presence, so they are sent with an empty value when enabled.
    """
    data = {
        "text": request.text,
        "input": request.input.value,
        "output": request.output.value,
    }
    if request.randomize:
        data["randomize"] = ""
    if request.classes:
        data["classes"] = ""
    return data


def describe_error(error: MaskitServiceError) -> str:
    """
    User-facing message for a failed call
    """
    if error.response_text:
        return f"An error occurred: {error.response_text}"
    return "An error occurred!"


maskit_client = MaskitClient()
