from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any


class FeedboardClientError(RuntimeError):
    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class FeedboardClient:
    """Minimal JSON client for the feedback board API."""

    base_url: str
    timeout_seconds: int = 15

    def request_json(self, method: str, path: str, *, params: dict[str, Any] | None = None, body: dict[str, Any] | None = None) -> dict[str, Any]:
        url = self.base_url.rstrip("/") + path
        if params:
            url += "?" + urllib.parse.urlencode({k: v for k, v in params.items() if v is not None})

        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(url, data=data, method=method)
        req.add_header("Accept", "application/json")
        if data is not None:
            req.add_header("Content-Type", "application/json")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            try:
                payload = json.loads(e.read().decode("utf-8", errors="ignore") or "{}")
            except ValueError:
                payload = {}
            message = payload.get("error") if isinstance(payload, dict) else None
            raise FeedboardClientError(message or f"HTTP {e.code}", status=e.code) from e
        except urllib.error.URLError as e:
            raise FeedboardClientError(str(e.reason)) from e
        except (OSError, http.client.HTTPException) as e:
            # timeouts and dropped connections raised while reading the response
            raise FeedboardClientError(str(e) or type(e).__name__) from e
        try:
            j = json.loads(raw.decode("utf-8") or "{}")
        except ValueError as e:
            raise FeedboardClientError(f"Invalid JSON from {path}") from e
        return j if isinstance(j, dict) else {}

    def cast_vote(self, post_id: str) -> dict[str, Any]:
        return self.request_json("POST", "/api/vote", params={"postId": post_id})

    def retract_vote(self, post_id: str) -> dict[str, Any]:
        return self.request_json("DELETE", "/api/vote", params={"postId": post_id})

    def create_post(self, board_id: str, title: str, description: str = "") -> dict[str, Any]:
        return self.request_json("POST", "/api/post", params={"boardId": board_id}, body={"title": title, "description": description})
