"""Dialect-specific aggregate expressions."""

from typing import Any

from sqlalchemy import JSON
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class json_name_array(FunctionElement):
    """Aggregate non-null values of one column into a JSON array.

    Groups with no non-null values yield ``[]`` rather than NULL.
    """

    type = JSON()
    name = "json_name_array"
    inherit_cache = True


def _only_column(element: json_name_array, compiler: Any, **kw: Any) -> str:
    (column,) = list(element.clauses)
    return compiler.process(column, **kw)


@compiles(json_name_array)
def _compile_default(element: json_name_array, compiler: Any, **kw: Any) -> str:
    column = _only_column(element, compiler, **kw)
    return (
        f"coalesce(json_group_array({column}) FILTER (WHERE {column} IS NOT NULL), "
        "'[]')"
    )


@compiles(json_name_array, "postgresql")
def _compile_postgresql(element: json_name_array, compiler: Any, **kw: Any) -> str:
    column = _only_column(element, compiler, **kw)
    return (
        f"coalesce(json_agg({column}) FILTER (WHERE {column} IS NOT NULL), "
        "'[]'::json)"
    )
