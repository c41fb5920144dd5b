"""Post-deploy smoke checks executed from the app container."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Any
from uuid import uuid4

BASE_URL = "http://localhost:8000"
GRAPHQL_PATH = "/graphql"


def request(
    path: str,
    *,
    method: str = "GET",
    body: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    expected: int = 200,
) -> bytes:
    payload = None
    req_headers = {"Accept": "application/json"}
    if headers:
        req_headers.update(headers)
    if body is not None:
        payload = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    request_obj = urllib.request.Request(
        f"{BASE_URL}{path}",
        data=payload,
        method=method,
        headers=req_headers,
    )
    try:
        with urllib.request.urlopen(request_obj, timeout=30) as response:
            content = response.read()
            status = response.getcode()
    except urllib.error.HTTPError as exc:  # pragma: no cover - runtime smoke script
        body_text = exc.read().decode("utf-8", errors="ignore")
        raise RuntimeError(f"{method} {path} -> {exc.code}: {body_text}") from exc

    if status != expected:
        raise RuntimeError(f"{method} {path} -> {status}, expected {expected}")
    return content


def graphql(query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
    result = json.loads(
        request(
            GRAPHQL_PATH,
            method="POST",
            body={"query": query, "variables": variables or {}},
        ).decode("utf-8")
    )
    if result.get("errors"):
        raise RuntimeError(f"GraphQL errors: {result['errors']}")
    return result["data"]


def main() -> None:
    for endpoint in ["/health", "/ready", "/metrics"]:
        request(endpoint, expected=200)

    suffix = uuid4().hex[:10]
    created = graphql(
        "mutation($input: CreateStudentInput!) { createStudent(createStudentInput: $input) { id } }",
        {"input": {"firstName": "Smoke", "lastName": f"Check-{suffix}"}},
    )
    student_id = created["createStudent"]["id"]

    fetched = graphql(
        "query($id: String!) { student(id: $id) { id lastName } }",
        {"id": student_id},
    )
    if fetched["student"] != {"id": student_id, "lastName": f"Check-{suffix}"}:
        raise RuntimeError(f"Unexpected student payload: {fetched}")

    print("Smoke checks passed.")


if __name__ == "__main__":
    main()
