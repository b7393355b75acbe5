"""API client for the PromptStudio REST API."""

from __future__ import annotations

from typing import Any

import httpx


class StudioClient:
    """HTTP client wrapping the PromptStudio API endpoints."""

    def __init__(self, base_url: str = "http://localhost:8400", auth_token: str | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self._client = httpx.Client(base_url=f"{self.base_url}/api/v1", headers=headers, timeout=120)

    def _handle(self, resp: httpx.Response) -> Any:
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except Exception:
                detail = resp.text
            if isinstance(detail, dict):
                detail = detail.get("message", detail)
            raise RuntimeError(f"API error ({resp.status_code}): {detail}")
        if resp.status_code == 204:
            return None
        return resp.json()

    # --- Templates ---

    def list_templates(self) -> list[dict]:
        return self._handle(self._client.get("/templates"))

    def create_template(self, data: dict) -> dict:
        return self._handle(self._client.post("/templates", json=data))

    def get_template(self, template_id: str) -> dict:
        return self._handle(self._client.get(f"/templates/{template_id}"))

    def delete_template(self, template_id: str) -> None:
        self._handle(self._client.delete(f"/templates/{template_id}"))

    # --- Snippets ---

    def list_snippets(self, search: str | None = None) -> list[dict]:
        params = {"search": search} if search else {}
        return self._handle(self._client.get("/snippets", params=params))

    def suggest_snippets(self, query: str) -> list[dict]:
        return self._handle(self._client.get("/snippets/suggest", params={"q": query}))

    def create_snippet(self, data: dict) -> dict:
        return self._handle(self._client.post("/snippets", json=data))

    def delete_snippet(self, snippet_id: str) -> None:
        self._handle(self._client.delete(f"/snippets/{snippet_id}"))

    # --- LLM authoring ---

    def prepare(self, raw_prompt: str) -> dict:
        return self._handle(self._client.post("/llm/prepare", json={"raw_prompt": raw_prompt}))

    def optimize(self, raw_prompt: str) -> dict:
        return self._handle(self._client.post("/llm/optimize", json={"raw_prompt": raw_prompt}))

    # --- Generation ---

    def resolve(self, data: dict) -> dict:
        return self._handle(self._client.post("/resolve", json=data))

    def generate(self, data: dict) -> dict:
        return self._handle(self._client.post("/generate", json=data))
