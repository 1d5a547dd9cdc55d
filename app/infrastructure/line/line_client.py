from __future__ import annotations

import logging

import httpx

from app.application.exceptions import MessageSendError


class LineClient:
    def __init__(
        self,
        access_token: str,
        reply_endpoint: str,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._access_token = access_token
        self._reply_endpoint = reply_endpoint
        self._client = http_client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def reply_text(self, reply_token: str, text: str) -> None:
        payload = {
            "replyToken": reply_token,
            "messages": [{"type": "text", "text": text}],
        }
        headers = {"Authorization": f"Bearer {self._access_token}"}
        try:
            resp = self._client.post(self._reply_endpoint, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise MessageSendError(f"LINE reply request failed: {e}") from e

        if resp.status_code >= 400:
            try:
                error_json = resp.json()
                error_message = error_json.get("message")
                error_details = error_json.get("details")
            except ValueError:
                error_message = resp.text
                error_details = None

            self._logger.error(
                "LINE reply failed",
                extra={
                    "status": resp.status_code,
                    "error_message": error_message,
                    "error_details": error_details,
                    "text_length": len(text),
                },
            )
            raise MessageSendError(f"LINE reply rejected with status {resp.status_code}")
