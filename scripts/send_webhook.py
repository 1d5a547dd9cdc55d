#!/usr/bin/env python3
from __future__ import annotations

import argparse
import base64
import hashlib
import hmac
import json
import secrets
import time
from typing import Any

import httpx
from httpx import ConnectError


def build_payload(user_id: str, text: str | None, lat: float | None, lng: float | None) -> dict[str, Any]:
    now_ms = int(time.time() * 1000)
    if lat is not None and lng is not None:
        message = {"id": str(now_ms), "type": "location", "latitude": lat, "longitude": lng}
    else:
        message = {"id": str(now_ms), "type": "text", "text": text or ""}
    return {
        "destination": "Ubot",
        "events": [
            {
                "type": "message",
                "mode": "active",
                "timestamp": now_ms,
                "replyToken": secrets.token_hex(16),
                "source": {"type": "user", "userId": user_id},
                "message": message,
            }
        ],
    }


def sign_body(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a signed LINE webhook POST to a local server")
    parser.add_argument("--url", default="http://127.0.0.1:8001/webhooks/line")
    parser.add_argument("--user", default="U_local_tester")
    parser.add_argument("--text", default="我想預約明天下午三點的基本洗車")
    parser.add_argument("--lat", type=float, default=None)
    parser.add_argument("--lng", type=float, default=None)
    parser.add_argument("--channel-secret", default="", help="LINE channel secret for X-Line-Signature")
    args = parser.parse_args()

    payload = build_payload(args.user, args.text, args.lat, args.lng)
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")

    headers = {"Content-Type": "application/json"}
    if args.channel_secret:
        headers["X-Line-Signature"] = sign_body(args.channel_secret, body)

    try:
        resp = httpx.post(args.url, content=body, headers=headers, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn app.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
