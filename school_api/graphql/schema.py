"""GraphQL schema and FastAPI router."""

from __future__ import annotations

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter

from school_api.core.config import get_settings
from school_api.core.metrics import GraphQLMetricsExtension
from school_api.graphql.context import get_context
from school_api.modules.lessons.resolvers import LessonMutation, LessonQuery
from school_api.modules.students.resolvers import StudentMutation, StudentQuery
from school_api.shared.exceptions import should_mask_error

settings = get_settings()


@strawberry.type
class Query(LessonQuery, StudentQuery):
    pass


@strawberry.type
class Mutation(LessonMutation, StudentMutation):
    pass


class MaskInternalErrors(MaskErrors):
    """Replace unexpected failures with a generic `internal_error`."""

    def anonymise_error(self, error: GraphQLError) -> GraphQLError:
        masked = super().anonymise_error(error)
        masked.extensions = {"code": "internal_error"}
        return masked


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[
        GraphQLMetricsExtension,
        MaskInternalErrors(should_mask_error=should_mask_error, error_message="Internal server error"),
    ],
)


def create_graphql_router() -> GraphQLRouter:
    """Create the GraphQL router mounted by the FastAPI app."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide=settings.graphql_ide,
    )
