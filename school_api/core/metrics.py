"""Prometheus metrics helpers for HTTP and GraphQL observability."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from time import perf_counter

from fastapi import Request, Response
from graphql import DocumentNode, OperationDefinitionNode
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from strawberry.extensions import SchemaExtension

HTTP_REQUESTS_TOTAL = Counter(
    "school_http_requests_total",
    "Total number of HTTP requests handled by the API.",
    ["method", "path", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "school_http_request_duration_seconds",
    "HTTP request latency in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

GRAPHQL_OPERATIONS_TOTAL = Counter(
    "school_graphql_operations_total",
    "Total number of GraphQL operations executed.",
    ["operation_type", "outcome"],
)

GRAPHQL_OPERATION_DURATION_SECONDS = Histogram(
    "school_graphql_operation_duration_seconds",
    "GraphQL operation latency in seconds.",
    ["operation_type"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


def _request_path_label(request: Request) -> str:
    route = request.scope.get("route")
    route_path = getattr(route, "path", None)
    if route_path:
        return str(route_path)
    return request.url.path


async def instrument_http_request(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Track request count and latency for each endpoint."""
    started_at = perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        path_label = _request_path_label(request)
        method_label = request.method.upper()
        duration_seconds = perf_counter() - started_at

        HTTP_REQUESTS_TOTAL.labels(
            method=method_label,
            path=path_label,
            status_code=str(status_code),
        ).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(
            method=method_label,
            path=path_label,
        ).observe(duration_seconds)


def operation_type_label(document: DocumentNode | None, operation_name: str | None) -> str:
    """Resolve `query`/`mutation`/`subscription` for the executed operation."""
    if document is None:
        return "unknown"
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        if operation_name is None or (definition.name and definition.name.value == operation_name):
            return definition.operation.value
    return "unknown"


class GraphQLMetricsExtension(SchemaExtension):
    """Track GraphQL operation count, outcome and latency."""

    def on_operation(self) -> Iterator[None]:
        started_at = perf_counter()
        yield
        context = self.execution_context
        operation_type = operation_type_label(context.graphql_document, context.operation_name)
        result = context.result
        failed = bool(result is not None and result.errors)

        GRAPHQL_OPERATIONS_TOTAL.labels(
            operation_type=operation_type,
            outcome="error" if failed else "ok",
        ).inc()
        GRAPHQL_OPERATION_DURATION_SECONDS.labels(operation_type=operation_type).observe(
            perf_counter() - started_at,
        )


def build_metrics_response() -> Response:
    """Return metrics payload in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
