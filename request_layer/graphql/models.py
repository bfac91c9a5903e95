"""Options model for Cube GraphQL queries."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


# entity -> field -> selected
CubeQueryFields = dict[str, dict[str, bool | None] | None]

# entity -> field -> operator -> value
CubeQueryWhere = dict[str, dict[str, dict[str, Any] | None] | None]


class CubeQueryOptions(BaseModel):
    """Structured description of a Cube query.

    Mapping order is preserved and drives the rendered order of entities,
    fields and operators.

    Attributes:
        limit: Page size. Omitted from the query when 0 or None.
        offset: Rows to skip. Omitted from the query when 0 or None.
        where: Filters per entity and field, e.g.
            ``{"sales": {"total": {"greaterThan": 1000}}}``.
        fields: Field selection per entity, e.g.
            ``{"sales": {"total": True, "status": False}}``.
        default_entity: Entity rendered when ``fields`` selects nothing.
        default_fields: Fields of ``default_entity`` rendered in that case.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    limit: Annotated[int | None, Field(ge=0)] = None
    offset: Annotated[int | None, Field(ge=0)] = None
    where: CubeQueryWhere | None = None
    fields: CubeQueryFields | None = None
    default_entity: str | None = Field(default=None, alias="defaultEntity")
    default_fields: list[str] | None = Field(default=None, alias="defaultFields")
