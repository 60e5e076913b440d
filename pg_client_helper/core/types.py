"""Shared core type aliases used across contracts, executor, and ports."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple, Union

# Nominal: any value the driver can bind (str, int, datetime, dict for json, ...).
# The transformer never inspects it; only list and tuple values are spread.
Scalar = Any
SpreadValue = Union[List[Scalar], Tuple[Scalar, ...]]
ParamValue = Union[Scalar, SpreadValue]

NamedParams = Mapping[str, ParamValue]
PositionalParams = List[Any]
QueryParams = Union[NamedParams, PositionalParams, Tuple[Any, ...], None]

Row = Mapping[str, Any]
Rows = List[Row]
MaybeRow = Optional[Row]
