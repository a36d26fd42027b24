import sys
from pathlib import Path

# Add the project root to the path so tests can import maskit_web
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest
from fastapi.testclient import TestClient

from maskit_web.main import app
from maskit_web.schemas.result import ProcessedResult

@pytest.fixture
def client():
    """Create a test client for the FastAPI app"""
    with TestClient(app) as client:
        yield client

@pytest.fixture
def html_result():
    """Processed result in the HTML dialect"""
    return ProcessedResult(
        content="<span class='replacement-text'>Paní</span><span class='orig-brackets'>_[Jana Nováková]</span>",
        format="html",
        stats="<table><tr><td>person</td><td>1</td></tr></table>",
    )

@pytest.fixture
def txt_result():
    """Processed result in the plain text dialect"""
    return ProcessedResult(
        content="Paní_[Jana Nováková] bydlí v Praze_[Brně].\nDopis odeslala firma ČEZ.",
        format="txt",
    )
