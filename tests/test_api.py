import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

# Import the main application
from maskit_web.main import app
from maskit_web.core.exceptions import ServiceResponseError, ServiceUnavailableError
from maskit_web.schemas.result import ProcessedResult, ServerInfo

client = TestClient(app)

SCENARIO_HTML = "<span class='replacement-text'>Paní</span><span class='orig-brackets'>_[Jana Nováková]</span>"

def test_health_endpoint():
    """Test the health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}

def test_root_endpoint():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"

@patch('maskit_web.api.v1.process.maskit_client')
def test_process_endpoint(mock_client):
    """Test processing with a mocked remote service"""
    mock_client.process.return_value = ProcessedResult(
        content=SCENARIO_HTML,
        format="html",
        stats="<p>1 person</p>",
    )

    response = client.post("/api/v1/process/", json={
        "request": {"text": "Paní Jana Nováková", "output": "html"},
        "options": {"show_originals": False},
    })
    assert response.status_code == 200

    data = response.json()
    assert data["result"]["content"] == SCENARIO_HTML
    assert data["result"]["stats"] == "<p>1 person</p>"
    assert data["options"] == {"show_originals": False, "show_highlighting": True}
    assert data["rendered"] == '<span class="replacement-text">Paní</span>'

    sent = mock_client.process.call_args[0][0]
    assert sent.text == "Paní Jana Nováková"
    assert sent.randomize is True

@patch('maskit_web.api.v1.process.maskit_client')
def test_process_endpoint_txt_display(mock_client):
    mock_client.process.return_value = ProcessedResult(content="a_[b]\nc", format="txt")

    response = client.post("/api/v1/process/", json={"request": {"text": "b\nc", "output": "txt"}})
    assert response.status_code == 200
    assert response.json()["rendered"] == "a_[b]\n<br>c"

@patch('maskit_web.api.v1.process.maskit_client')
def test_process_endpoint_remote_error(mock_client):
    """Remote failures are reported as a bad gateway with the service's message"""
    mock_client.process.side_effect = ServiceResponseError(
        "failed", status_code=500, response_text="Text is too long"
    )

    response = client.post("/api/v1/process/", json={"request": {"text": "Ahoj"}})
    assert response.status_code == 502
    assert response.json()["detail"] == "An error occurred: Text is too long"

@patch('maskit_web.api.v1.process.maskit_client')
def test_process_endpoint_unreachable(mock_client):
    mock_client.process.side_effect = ServiceUnavailableError("timeout")

    response = client.post("/api/v1/process/", json={"request": {"text": "Ahoj"}})
    assert response.status_code == 502
    assert response.json()["detail"] == "An error occurred!"

def test_process_endpoint_rejects_randomize_with_classes():
    response = client.post("/api/v1/process/", json={
        "request": {"text": "Ahoj", "randomize": True, "classes": True},
    })
    assert response.status_code == 422

def test_process_endpoint_rejects_empty_text():
    response = client.post("/api/v1/process/", json={"request": {"text": "   "}})
    assert response.status_code == 422

@patch('maskit_web.api.v1.process.maskit_client')
def test_info_endpoint(mock_client):
    mock_client.info.return_value = ServerInfo(version="1.2", features="randomize", online=True)

    response = client.get("/api/v1/process/info")
    assert response.status_code == 200
    assert response.json() == {"version": "1.2", "features": "randomize", "online": True}

@patch('maskit_web.api.v1.process.maskit_client')
def test_info_endpoint_offline(mock_client):
    """Info never fails, it reports the service as offline"""
    mock_client.info.side_effect = ServiceUnavailableError("down")

    response = client.get("/api/v1/process/info")
    assert response.status_code == 200
    assert response.json() == {"version": None, "features": None, "online": False}

@patch('maskit_web.api.v1.process.maskit_client')
def test_detect_endpoint(mock_client):
    mock_client.detect.return_value = ProcessedResult(content="<q>citace</q>", format="html")

    response = client.post("/api/v1/process/detect", json={"text": "citace", "output": "html"})
    assert response.status_code == 200
    assert response.json()["content"] == "<q>citace</q>"

    args = mock_client.detect.call_args[0]
    assert args[0] == "citace"
    assert args[2].value == "html"

def test_render_endpoint():
    response = client.post("/api/v1/render/render", json={
        "result": {"content": SCENARIO_HTML, "format": "html"},
        "options": {"show_originals": True, "show_highlighting": False},
    })
    assert response.status_code == 200
    assert response.json() == {
        "content": 'Paní<span class="orig-brackets">_[Jana Nováková]</span>',
        "format": "html",
    }

def test_render_endpoint_default_options():
    response = client.post("/api/v1/render/render", json={
        "result": {"content": SCENARIO_HTML, "format": "html"},
    })
    assert response.status_code == 200
    assert response.json()["content"] == SCENARIO_HTML

def test_display_endpoint():
    response = client.post("/api/v1/render/display", json={
        "result": {"content": "Paní_[Jana]\nPraha", "format": "txt"},
        "options": {"show_originals": False},
    })
    assert response.status_code == 200
    assert response.json()["content"] == "Paní\n<br>Praha"

def test_export_output_html():
    response = client.post("/api/v1/export/output", json={
        "result": {"content": SCENARIO_HTML, "format": "html"},
        "options": {"show_originals": False},
    })
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["content-disposition"] == 'attachment; filename="citations.html"'
    assert response.text == '<span class="replacement-text">Paní</span>'

def test_export_output_txt_has_no_line_break_markup():
    response = client.post("/api/v1/export/output", json={
        "result": {"content": "a_[b]\nc", "format": "txt"},
    })
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["content-disposition"] == 'attachment; filename="citations.txt"'
    assert response.text == "a_[b]\nc"

def test_export_output_empty():
    response = client.post("/api/v1/export/output", json={"result": {"content": "", "format": "txt"}})
    assert response.status_code == 404

def test_export_stats():
    response = client.post("/api/v1/export/stats", json={
        "content": "x", "format": "html", "stats": "<table></table>",
    })
    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="statistics.html"'
    assert response.text == "<table></table>"

def test_export_stats_missing():
    response = client.post("/api/v1/export/stats", json={"content": "x", "format": "html"})
    assert response.status_code == 404

def test_export_output_only_originals_gives_empty_file():
    """Hiding originals can empty the text, the download is still produced"""
    response = client.post("/api/v1/export/output", json={
        "result": {"content": "_[Jana]", "format": "txt"},
        "options": {"show_originals": False},
    })
    assert response.status_code == 200
    assert response.text == ""
    assert response.headers["content-disposition"] == 'attachment; filename="citations.txt"'

@pytest.mark.parametrize("output_format", ["čeština", 'x"; filename="evil.exe', "conllu"])
def test_export_output_filename_uses_known_formats_only(output_format):
    response = client.post("/api/v1/export/output", json={
        "result": {"content": "x", "format": output_format},
    })
    assert response.status_code == 200
    expected = "conllu" if output_format == "conllu" else "txt"
    assert response.headers["content-disposition"] == f'attachment; filename="citations.{expected}"'
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "x"

@patch('maskit_web.api.v1.process.maskit_client')
def test_process_endpoint_bad_result_type(mock_client):
    """A malformed remote answer is a bad gateway, not a server error"""
    mock_client.process.side_effect = ServiceResponseError("unexpected JSON")

    response = client.post("/api/v1/process/", json={"request": {"text": "Ahoj"}})
    assert response.status_code == 502
