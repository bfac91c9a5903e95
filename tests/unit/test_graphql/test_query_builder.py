"""Unit tests for Cube query synthesis."""

import pytest
from pydantic import ValidationError

from request_layer.graphql.models import CubeQueryOptions
from request_layer.graphql.query_builder import (
    build_cube_query,
    build_fields,
    build_where_clause,
)


class TestBuildFields:
    """Tests for field projection."""

    def test_only_selected_fields_rendered(self) -> None:
        """False fields are excluded."""
        result = build_fields({"sales": {"total": True, "status": False}})

        assert result == "    sales {\n      total\n    }"

    def test_insertion_order_kept(self) -> None:
        """Fields and entities keep mapping order."""
        result = build_fields(
            {
                "sales": {"id": True, "total": True},
                "customer": {"name": True},
            }
        )

        assert result == (
            "    sales {\n      id\n      total\n    }\n"
            "    customer {\n      name\n    }"
        )

    def test_entities_without_selection_omitted(self) -> None:
        """Entities with nothing selected produce no block."""
        result = build_fields({"sales": {"total": False}, "customer": None})

        assert result == ""

    def test_empty_input(self) -> None:
        """None renders nothing."""
        assert build_fields(None) == ""


class TestBuildWhereClause:
    """Tests for filter rendering."""

    def test_scalar_number(self) -> None:
        """Numbers render bare."""
        result = build_where_clause({"sales": {"total": {"greaterThan": 1000}}})

        assert result == "where: {sales: {total: {greaterThan: 1000}}}"

    def test_scalar_string_is_quoted(self) -> None:
        """Strings render as quoted literals."""
        result = build_where_clause({"customer": {"kind": {"equals": "PJ"}}})

        assert result == 'where: {customer: {kind: {equals: "PJ"}}}'

    def test_scalar_bool(self) -> None:
        """Booleans render as GraphQL booleans."""
        result = build_where_clause({"order": {"paid": {"equals": True}}})

        assert result == "where: {order: {paid: {equals: true}}}"

    def test_list_elements_render_raw(self) -> None:
        """List elements are joined without quoting."""
        result = build_where_clause(
            {"sales": {"status": {"in": ["APPROVED", "DONE"]}, "id": {"in": [1, 2]}}}
        )

        assert result == (
            "where: {sales: {status: {in: [APPROVED, DONE]}, id: {in: [1, 2]}}}"
        )

    def test_multiple_operators_and_entities(self) -> None:
        """Operators, fields and entities are comma-joined."""
        result = build_where_clause(
            {
                "sales": {"total": {"greaterThan": 1000, "lessThan": 5000}},
                "customer": {"region": {"equals": "SOUTH"}},
            }
        )

        assert result == (
            "where: {sales: {total: {greaterThan: 1000, lessThan: 5000}}, "
            'customer: {region: {equals: "SOUTH"}}}'
        )

    def test_integral_float_renders_as_integer(self) -> None:
        """1000.0 renders like 1000."""
        result = build_where_clause({"sales": {"total": {"gte": 1000.0, "lt": 2.5}}})

        assert result == "where: {sales: {total: {gte: 1000, lt: 2.5}}}"

    def test_empty_entity_filters_omitted(self) -> None:
        """Entities with no filters produce no clause."""
        assert build_where_clause({"sales": {}}) == ""
        assert build_where_clause(None) == ""


class TestBuildCubeQuery:
    """Tests for full query assembly."""

    def test_full_query_layout(self) -> None:
        """Arguments and selection are assembled in order."""
        result = build_cube_query(
            {
                "limit": 20,
                "offset": 40,
                "where": {"sales": {"total": {"greaterThan": 1000}}},
                "fields": {"sales": {"id": True, "total": True}},
            }
        )

        assert result == (
            "query CubeQuery {\n"
            "  cube(\n"
            "    limit: 20\n"
            "    offset: 40\n"
            "    where: {sales: {total: {greaterThan: 1000}}}\n"
            "  ) {\n"
            "    sales {\n"
            "      id\n"
            "      total\n"
            "    }\n"
            "  }\n"
            "}"
        )

    def test_zero_limit_and_offset_omitted(self) -> None:
        """0 is treated as unset for limit and offset."""
        result = build_cube_query(
            {"limit": 0, "offset": 0, "fields": {"sales": {"id": True}}}
        )

        assert "limit" not in result
        assert "offset" not in result
        assert "  cube {\n" in result

    def test_default_entity_fallback(self) -> None:
        """Default entity and fields are used when nothing is selected."""
        result = build_cube_query(
            CubeQueryOptions(
                fields={"sales": {"id": False}},
                default_entity="driver",
                default_fields=["name", "login"],
            )
        )

        assert "    driver {\n      name\n      login\n    }" in result

    def test_camel_case_aliases_accepted(self) -> None:
        """defaultEntity/defaultFields keys work in mappings."""
        result = build_cube_query(
            {"defaultEntity": "driver", "defaultFields": ["id"]}
        )

        assert "    driver {\n      id\n    }" in result

    def test_explicit_fields_win_over_defaults(self) -> None:
        """Default fields are ignored when fields select something."""
        result = build_cube_query(
            {
                "fields": {"sales": {"total": True}},
                "defaultEntity": "driver",
                "defaultFields": ["id"],
            }
        )

        assert "driver" not in result
        assert "sales {" in result

    def test_deterministic(self) -> None:
        """Structurally equal options give identical text."""
        options = {
            "limit": 5,
            "where": {"sales": {"status": {"in": ["A", "B"]}}},
            "fields": {"sales": {"status": True}},
        }

        assert build_cube_query(options) == build_cube_query(dict(options))

    def test_empty_options(self) -> None:
        """No options render an empty cube selection."""
        assert build_cube_query() == "query CubeQuery {\n  cube {\n  }\n}"

    def test_negative_limit_rejected(self) -> None:
        """Negative pagination values are invalid."""
        with pytest.raises(ValidationError):
            build_cube_query({"limit": -1})
