"""Rewrite `$name` placeholders into the `$1, $2, ...` form asyncpg expects.

Example:

    >>> transform_query(
    ...     "SELECT * FROM t WHERE a = $a AND b IN ($b)",
    ...     {"$a": 1, "$b": [2, 3]},
    ... )
    ('SELECT * FROM t WHERE a = $1 AND b IN ($2, $3)', [1, 2, 3])

The rewrite is purely textual. Placeholder keys that also appear inside string
literals, comments or longer identifiers are replaced there as well; callers
must pick names that do not collide with the rest of the statement.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Tuple

from .errors import InvalidParameterName
from .types import PositionalParams, QueryParams


def is_spread(value: Any) -> bool:
    """Return True for values expanded into one placeholder per element."""

    return isinstance(value, (list, tuple))


def _validate_key(key: Any) -> str:
    if not isinstance(key, str) or not key.startswith("$") or len(key) < 2:
        raise InvalidParameterName(key)
    return key


def _ordered_keys(params: Mapping[str, Any]) -> list[str]:
    # Longest first, so `$id` never matches inside `$id_2`. `sorted` is stable,
    # equal-length keys keep mapping order.
    keys = [_validate_key(key) for key in params]
    return sorted(keys, key=len, reverse=True)


def transform_query(
    query: str,
    params: QueryParams = None,
) -> Tuple[str, Optional[PositionalParams]]:
    """Convert named parameters to positional ones.

    Args:
        query: SQL text using `$name` placeholders.
        params: Mapping of `$name` to value. List/tuple values are spread into
            one placeholder per element. `None` or an already positional
            list/tuple is returned unchanged together with `query`.

    Returns:
        `(query, params)` with placeholders renumbered from `$1` in assignment
        order. Keys not present in `query` are dropped.

    Raises:
        InvalidParameterName: a key does not start with `$`.
    """

    if params is None or isinstance(params, (list, tuple)):
        return query, params
    if not isinstance(params, Mapping):
        raise TypeError(
            f"params must be a mapping, list, tuple or None, got {type(params).__name__}"
        )

    out_query = query
    out_params: PositionalParams = []

    for key in _ordered_keys(params):
        if key not in out_query:
            continue

        value = params[key]
        if is_spread(value):
            placeholders = []
            for item in value:
                out_params.append(item)
                placeholders.append(f"${len(out_params)}")
            out_query = out_query.replace(key, ", ".join(placeholders))
        else:
            out_params.append(value)
            out_query = out_query.replace(key, f"${len(out_params)}")

    return out_query, out_params
