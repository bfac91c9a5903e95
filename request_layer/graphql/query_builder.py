"""GraphQL text generation for Cube queries.

Filter values are embedded as literals without escaping. Never pass
untrusted strings as filter values without escaping them first.
"""

import json
from collections.abc import Mapping
from typing import Any

from request_layer.graphql.models import (
    CubeQueryFields,
    CubeQueryOptions,
    CubeQueryWhere,
)


_FIELD_INDENT = " " * 6
_ENTITY_INDENT = " " * 4
_ARGUMENT_INDENT = " " * 4


def _normalize_number(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _raw_element(value: Any) -> str:
    """Render a list element without quoting."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(_normalize_number(value))


def _literal(value: Any) -> str:
    """Render a scalar as a JSON literal (strings quoted)."""
    return json.dumps(_normalize_number(value), ensure_ascii=False)


def _render_operator(operator: str, value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return f"{operator}: [{', '.join(_raw_element(item) for item in value)}]"
    return f"{operator}: {_literal(value)}"


def _render_entity_block(entity: str, field_names: list[str]) -> str:
    separator = "\n" + _FIELD_INDENT
    return (
        f"{_ENTITY_INDENT}{entity} {{\n"
        f"{_FIELD_INDENT}{separator.join(field_names)}\n"
        f"{_ENTITY_INDENT}}}"
    )


def build_fields(fields: CubeQueryFields | None = None) -> str:
    """Render the field selection block.

    Args:
        fields: Mapping of entity to ``{field: selected}``.

    Returns:
        One block per entity with at least one selected field, joined by
        newlines. Empty string when nothing is selected.

    Example:
        >>> print(build_fields({"sales": {"total": True, "status": False}}))
            sales {
              total
            }
    """
    blocks = []
    for entity, entity_fields in (fields or {}).items():
        selected = [name for name, chosen in (entity_fields or {}).items() if chosen]
        if selected:
            blocks.append(_render_entity_block(entity, selected))
    return "\n".join(blocks)


def build_where_clause(where: CubeQueryWhere | None = None) -> str:
    """Render the ``where`` argument.

    Args:
        where: Mapping of entity to ``{field: {operator: value}}``.

    Returns:
        ``where: {...}`` or an empty string when there are no filters.

    Example:
        >>> build_where_clause({"sales": {"total": {"greaterThan": 1000}}})
        'where: {sales: {total: {greaterThan: 1000}}}'
    """
    entities = []
    for entity, entity_filters in (where or {}).items():
        filters = []
        for field, conditions in (entity_filters or {}).items():
            operators = ", ".join(
                _render_operator(operator, value)
                for operator, value in (conditions or {}).items()
            )
            filters.append(f"{field}: {{{operators}}}")
        if filters:
            entities.append(f"{entity}: {{{', '.join(filters)}}}")

    if not entities:
        return ""
    return f"where: {{{', '.join(entities)}}}"


def build_cube_query(
    options: CubeQueryOptions | Mapping[str, Any] | None = None,
) -> str:
    """Render a complete Cube query.

    ``limit`` and ``offset`` are only emitted when truthy, so a value of 0
    is treated as unset.

    Args:
        options: Query options, as a model or a plain mapping.

    Returns:
        GraphQL text of a query named ``CubeQuery`` on the ``cube`` root.

    Example:
        >>> print(build_cube_query({"limit": 10, "fields": {"sales": {"id": True}}}))
        query CubeQuery {
          cube(
            limit: 10
          ) {
            sales {
              id
            }
          }
        }
    """
    if options is None:
        opts = CubeQueryOptions()
    elif isinstance(options, CubeQueryOptions):
        opts = options
    else:
        opts = CubeQueryOptions.model_validate(options)

    arguments = []
    if opts.limit:
        arguments.append(f"limit: {opts.limit}")
    if opts.offset:
        arguments.append(f"offset: {opts.offset}")
    where_clause = build_where_clause(opts.where)
    if where_clause:
        arguments.append(where_clause)

    selection = build_fields(opts.fields)
    if not selection and opts.default_entity and opts.default_fields:
        selection = _render_entity_block(opts.default_entity, opts.default_fields)

    lines = ["query CubeQuery {"]
    if arguments:
        lines.append("  cube(")
        lines.extend(f"{_ARGUMENT_INDENT}{argument}" for argument in arguments)
        lines.append("  ) {")
    else:
        lines.append("  cube {")
    if selection:
        lines.append(selection)
    lines.append("  }")
    lines.append("}")
    return "\n".join(lines)
