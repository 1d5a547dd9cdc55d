import json

import httpx
import pytest

from app.application.exceptions import MessageSendError
from app.infrastructure.line.line_client import LineClient

ENDPOINT = "https://api.line.me/v2/bot/message/reply"


def _client(handler) -> LineClient:
    return LineClient(
        access_token="token-123",
        reply_endpoint=ENDPOINT,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_reply_posts_single_text_message():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    _client(handler).reply_text("reply-token", "您好")

    assert seen["auth"] == "Bearer token-123"
    assert seen["body"] == {"replyToken": "reply-token", "messages": [{"type": "text", "text": "您好"}]}


def test_rejected_reply_raises_send_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Invalid reply token"})

    with pytest.raises(MessageSendError):
        _client(handler).reply_text("expired", "hi")


def test_network_failure_raises_send_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(MessageSendError):
        _client(handler).reply_text("tok", "hi")
