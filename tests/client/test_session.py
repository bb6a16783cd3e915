import json

import httpx
import pytest

from clarifai_inputs.client.errors import RequestError, RequestRetryable, RequestTimeout
from clarifai_inputs.client.request import Request
from clarifai_inputs.client.session import Session
from clarifai_inputs.resources.image import Image
from clarifai_inputs.resources.inputs import Inputs


OK_BODY = {"status": {"code": 10000, "description": "Ok"}}


class Recorder:
    """Mock transport handler that replays canned responses and keeps the requests"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def no_sleep(monkeypatch):
    # tenacity waits through time.sleep
    monkeypatch.setattr("time.sleep", lambda _: None)


def make_session(handler, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return Session(api_key="test-key", client=client, **kwargs)


class TestSessionInit:

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("CLARIFAI_API_KEY", raising=False)

        with pytest.raises(ValueError, match="CLARIFAI_API_KEY"):
            Session()

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("CLARIFAI_API_KEY", "env-key")

        with Session() as s:
            assert s.api_key == "env-key"

    def test_from_config(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("""
clarifai:
  api_key: "cfg-key"
  base_url: "https://api.example.test/"
  api_version: "v3"
  timeout: 5
""")

        s = Session.from_config(config_file)

        assert s.api_key == "cfg-key"
        assert s.timeout == 5.0
        assert s.get_all_inputs().url == "https://api.example.test/v3/inputs"
        s.close()

    def test_close_keeps_external_client(self):
        client = httpx.Client()
        s = Session(api_key="k", client=client)
        s.close()

        assert not client.is_closed
        client.close()


class TestSessionExecute:
    """Test suite for sending built requests"""

    def test_add_inputs_round_trip(self):
        """
        Test: Executing an add_inputs request
        How: Stub the transport and inspect the outgoing request
        Ensures: URL, auth header and JSON body are what the API expects
        """
        handler = Recorder(httpx.Response(200, json=OK_BODY))
        s = make_session(handler)
        batch = Inputs()
        batch.add_input(Image.from_url("https://example.com/a.jpg"), "a")

        result = s.add_inputs(batch).run()

        assert result == OK_BODY
        sent = handler.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "https://api.clarifai.com/v2/inputs"
        assert sent.headers["Authorization"] == "Key test-key"
        assert json.loads(sent.content) == {
            "inputs": [{"id": "a", "data": {"image": {"url": "https://example.com/a.jpg"}}}]
        }

    def test_delete_inputs_sends_body(self):
        handler = Recorder(httpx.Response(200, json=OK_BODY))
        s = make_session(handler)

        s.delete_inputs(["b", "a"]).run()

        sent = handler.requests[0]
        assert sent.method == "DELETE"
        assert json.loads(sent.content) == {"ids": ["b", "a"]}

    def test_get_without_body(self):
        handler = Recorder(httpx.Response(200, json={"inputs": []}))
        s = make_session(handler)

        assert s.get_input("xyz").run() == {"inputs": []}
        sent = handler.requests[0]
        assert str(sent.url) == "https://api.clarifai.com/v2/inputs/xyz"
        assert sent.content == b""

    def test_empty_response(self):
        handler = Recorder(httpx.Response(204))
        s = make_session(handler)

        assert s.delete_input("xyz").run() == {}

    def test_client_error_not_retried(self, no_sleep):
        handler = Recorder(httpx.Response(400, json={"status": {"code": 11102}}))
        s = make_session(handler)

        with pytest.raises(RequestError) as exc_info:
            s.get_all_inputs().run()

        assert not isinstance(exc_info.value, RequestRetryable)
        assert exc_info.value.status_code == 400
        assert "11102" in exc_info.value.body
        assert len(handler.requests) == 1

    def test_retryable_status_then_success(self, no_sleep):
        """
        Test: Transient server failure
        How: Respond 503 once, then 200
        Ensures: The session retries and returns the second response
        """
        handler = Recorder(httpx.Response(503), httpx.Response(200, json=OK_BODY))
        s = make_session(handler)

        assert s.get_input_statuses().run() == OK_BODY
        assert len(handler.requests) == 2

    def test_retry_exhausted(self, no_sleep):
        handler = Recorder(*(httpx.Response(429) for _ in range(3)))
        s = make_session(handler)

        with pytest.raises(RequestRetryable) as exc_info:
            s.get_all_inputs().run()

        assert exc_info.value.status_code == 429
        assert len(handler.requests) == 3

    def test_timeout(self, no_sleep):
        handler = Recorder(*(httpx.ReadTimeout("slow") for _ in range(3)))
        s = make_session(handler)

        with pytest.raises(RequestTimeout):
            s.get_all_inputs().run()
        assert len(handler.requests) == 3

    def test_connection_error_then_success(self, no_sleep):
        handler = Recorder(httpx.ConnectError("refused"), httpx.Response(200, json=OK_BODY))
        s = make_session(handler)

        assert s.delete_all_inputs().run() == OK_BODY

    def test_invalid_json(self):
        handler = Recorder(httpx.Response(200, content=b"<html>"))
        s = make_session(handler)

        with pytest.raises(RequestError, match="Invalid JSON"):
            s.get_all_inputs().run()


class TestRequest:

    def test_url_join(self):
        s = Session(api_key="k", base_url="https://host.test/")
        r = Request(s, "GET", "/inputs/status")

        assert r.url == "https://host.test/v2/inputs/status"
        s.close()

    def test_mapping_payload(self):
        s = Session(api_key="k")
        r = Request(s, "DELETE", "inputs")
        r.set_payload({"ids": ["1"]})

        assert r.body() == {"ids": ["1"]}
        s.close()
