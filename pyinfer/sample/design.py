"""
Sample store: immutable column-wise containers for observed data.

Sample holds an ordered, non-empty set of records sharing one schema.
Every variable is either numeric (float64, NaN for missing) or categorical
(object array, None for missing, with an ordered tuple of levels).
GroupedSample designates a categorical grouping variable and the two
levels being compared, in subtraction order.

Columns are stored read-only. Resampling derives new samples through
take() and with_column(); nothing mutates an existing Sample.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from numbers import Real
from typing import Any, Iterable, Literal, Mapping, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinfer.core.exceptions import InvalidParameterError, InsufficientDataError
from pyinfer.core.validation import check_consistent_length


VariableKind = Literal["numeric", "categorical"]

NUMERIC = "numeric"
CATEGORICAL = "categorical"
VALID_KINDS = (NUMERIC, CATEGORICAL)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, (bool, np.bool_))


def _infer_kind(values: Sequence[Any]) -> str:
    """Numeric iff every non-missing value is a real number (bools excluded)."""
    present = [v for v in values if not _is_missing(v)]
    if present and all(_is_number(v) for v in present):
        return NUMERIC
    return CATEGORICAL


def _level_sort_key(value: Any) -> tuple[str, Any]:
    return (type(value).__name__, value)


def _readonly(arr: NDArray) -> NDArray:
    arr.flags.writeable = False
    return arr


def _numeric_column(name: str, values: Any) -> NDArray[np.floating[Any]]:
    if isinstance(values, np.ndarray) and values.dtype != object:
        if values.dtype == bool or not np.issubdtype(values.dtype, np.number):
            raise InvalidParameterError(
                f"variable {name!r}: non-numeric dtype {values.dtype} "
                f"for a numeric variable",
                parameter=name,
            )
        return np.array(values, dtype=np.float64)

    out = np.empty(len(values), dtype=np.float64)
    for i, v in enumerate(values):
        if _is_missing(v):
            out[i] = np.nan
        elif _is_number(v):
            out[i] = float(v)
        else:
            raise InvalidParameterError(
                f"variable {name!r}: non-numeric value {v!r} at record {i} "
                f"for a numeric variable",
                parameter=name,
                value=v,
            )
    return out


def _categorical_column(
    name: str,
    values: Iterable[Any],
    levels: Sequence[Any] | None,
) -> tuple[NDArray, tuple[Any, ...]]:
    normalized = [None if _is_missing(v) else v for v in values]
    observed = []
    seen = set()
    for v in normalized:
        if v is not None and v not in seen:
            seen.add(v)
            observed.append(v)

    if levels is None:
        level_tuple = tuple(sorted(observed, key=_level_sort_key))
    else:
        level_tuple = tuple(levels)
        if len(set(level_tuple)) != len(level_tuple):
            raise InvalidParameterError(
                f"variable {name!r}: duplicate levels in {level_tuple!r}",
                parameter=name,
            )
        unknown = [v for v in observed if v not in level_tuple]
        if unknown:
            raise InvalidParameterError(
                f"variable {name!r}: values {unknown!r} are not among the "
                f"declared levels {level_tuple!r}",
                parameter=name,
            )

    arr = np.empty(len(normalized), dtype=object)
    arr[:] = normalized
    return arr, level_tuple


@dataclass(frozen=True, eq=False)
class Sample:
    """
    Immutable observed sample.

    Do not construct directly; use from_records() or from_columns().

    Attributes:
        _columns: Variable name -> read-only column array.
        _kinds: Variable name -> "numeric" | "categorical".
        _levels: Categorical variable name -> ordered levels.
    """
    _columns: dict[str, NDArray]
    _kinds: dict[str, str]
    _levels: dict[str, tuple[Any, ...]]

    # --- Construction ---

    @classmethod
    def from_records(
        cls,
        records: Sequence[Mapping[str, Any]],
        schema: Mapping[str, str] | None = None,
        *,
        levels: Mapping[str, Sequence[Any]] | None = None,
    ) -> Sample:
        """
        Build a sample from a sequence of records.

        Args:
            records: Mappings sharing the same keys, one per observation.
            schema: Optional variable name -> kind. Kinds not given are
                inferred from the values.
            levels: Optional categorical variable name -> level order.

        Returns:
            Validated Sample.

        Raises:
            InsufficientDataError: If records is empty.
            InvalidParameterError: If records disagree on their keys, or a
                value does not fit its variable's kind.
        """
        records = list(records)
        if len(records) == 0:
            raise InsufficientDataError(
                "records: a sample needs at least 1 record, got 0",
                parameter="records",
                required=1,
                available=0,
            )

        names = list(records[0].keys())
        expected = set(names)
        for i, rec in enumerate(records):
            if set(rec.keys()) != expected:
                raise InvalidParameterError(
                    f"records: record {i} has variables "
                    f"{sorted(rec.keys(), key=str)}, expected "
                    f"{sorted(expected, key=str)}",
                    parameter="records",
                )

        columns = {name: [rec[name] for rec in records] for name in names}
        return cls.from_columns(columns, schema, levels=levels)

    @classmethod
    def from_columns(
        cls,
        columns: Mapping[str, ArrayLike],
        schema: Mapping[str, str] | None = None,
        *,
        levels: Mapping[str, Sequence[Any]] | None = None,
    ) -> Sample:
        """
        Build a sample from equal-length columns.

        Args:
            columns: Variable name -> sequence of values.
            schema: Optional variable name -> kind.
            levels: Optional categorical variable name -> level order.

        Returns:
            Validated Sample.
        """
        schema = dict(schema or {})
        levels = dict(levels or {})

        if len(columns) == 0:
            raise InvalidParameterError(
                "columns: a sample needs at least one variable",
                parameter="columns",
            )

        for name in list(schema) + list(levels):
            if name not in columns:
                raise InvalidParameterError(
                    f"{name!r} is declared but is not a variable of the "
                    f"sample",
                    parameter=name,
                )

        raw = {
            name: (col if isinstance(col, np.ndarray) else list(col))
            for name, col in columns.items()
        }
        check_consistent_length(*raw.values(), names=tuple(raw))

        n = len(next(iter(raw.values())))
        if n < 1:
            raise InsufficientDataError(
                "columns: a sample needs at least 1 record, got 0",
                parameter="columns",
                required=1,
                available=0,
            )

        out_columns: dict[str, NDArray] = {}
        out_kinds: dict[str, str] = {}
        out_levels: dict[str, tuple[Any, ...]] = {}

        for name, col in raw.items():
            if name in schema:
                kind = schema[name]
            elif name in levels:
                kind = CATEGORICAL
            elif isinstance(col, np.ndarray) and col.dtype != object:
                kind = NUMERIC if (
                    np.issubdtype(col.dtype, np.number) and col.dtype != bool
                ) else CATEGORICAL
            else:
                kind = _infer_kind(col)

            if kind not in VALID_KINDS:
                raise InvalidParameterError(
                    f"variable {name!r}: kind must be one of {VALID_KINDS}, "
                    f"got {kind!r}",
                    parameter=name,
                    value=kind,
                )

            if kind == NUMERIC:
                if name in levels:
                    raise InvalidParameterError(
                        f"variable {name!r}: levels given for a numeric "
                        f"variable",
                        parameter=name,
                    )
                out_columns[name] = _readonly(_numeric_column(name, col))
            else:
                values = col.tolist() if isinstance(col, np.ndarray) else col
                arr, lv = _categorical_column(name, values, levels.get(name))
                out_columns[name] = _readonly(arr)
                out_levels[name] = lv
            out_kinds[name] = kind

        return cls(_columns=out_columns, _kinds=out_kinds, _levels=out_levels)

    # --- Accessors ---

    @property
    def n_observations(self) -> int:
        return len(next(iter(self._columns.values())))

    @property
    def variables(self) -> tuple[str, ...]:
        return tuple(self._columns)

    @property
    def metadata(self) -> dict[str, Any]:
        return {
            'n': self.n_observations,
            'variables': self.variables,
            'kinds': dict(self._kinds),
        }

    def _check_variable(self, name: str) -> None:
        if name not in self._columns:
            raise InvalidParameterError(
                f"{name!r} is not a variable of the sample; available: "
                f"{list(self._columns)}",
                parameter=name,
            )

    def kind(self, name: str) -> str:
        """Kind of a variable: 'numeric' or 'categorical'."""
        self._check_variable(name)
        return self._kinds[name]

    def levels(self, name: str) -> tuple[Any, ...]:
        """Ordered levels of a categorical variable."""
        self._check_variable(name)
        if self._kinds[name] != CATEGORICAL:
            raise InvalidParameterError(
                f"variable {name!r} is numeric and has no levels",
                parameter=name,
            )
        return self._levels[name]

    def column(self, name: str) -> NDArray:
        """Read-only column array of a variable."""
        self._check_variable(name)
        return self._columns[name]

    def missing(self, name: str) -> NDArray[np.bool_]:
        """Boolean mask of missing values in a variable."""
        col = self.column(name)
        if self._kinds[name] == NUMERIC:
            return np.isnan(col)
        return np.array([v is None for v in col], dtype=bool)

    def observed_levels(self, name: str) -> tuple[Any, ...]:
        """Levels of a categorical variable that occur in the data, in level order."""
        levels = self.levels(name)
        present = set(v for v in self._columns[name] if v is not None)
        return tuple(lv for lv in levels if lv in present)

    def __getitem__(self, name: str) -> NDArray:
        return self.column(name)

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __len__(self) -> int:
        return self.n_observations

    def to_records(self) -> list[dict[str, Any]]:
        """Row-wise copy of the data; missing numerics come back as NaN."""
        names = self.variables
        cols = [self._columns[name].tolist() for name in names]
        return [dict(zip(names, row)) for row in zip(*cols)]

    # --- Derivation ---

    def take(self, indices: ArrayLike) -> Sample:
        """New sample made of the rows at indices (repeats allowed)."""
        idx = np.asarray(indices, dtype=np.intp)
        if idx.ndim != 1 or len(idx) == 0:
            raise InvalidParameterError(
                f"indices: expected a non-empty 1D index array, got shape "
                f"{idx.shape}",
                parameter="indices",
            )
        columns = {
            name: _readonly(col[idx]) for name, col in self._columns.items()
        }
        return replace(self, _columns=columns)

    def with_column(self, name: str, values: ArrayLike) -> Sample:
        """
        New sample with one existing column replaced.

        The variable keeps its kind and levels. Categorical values must be
        declared levels or None.
        """
        self._check_variable(name)

        if self._kinds[name] == NUMERIC:
            new = _numeric_column(name, values)
        else:
            values = values.tolist() if isinstance(values, np.ndarray) else values
            new, _ = _categorical_column(name, values, self._levels[name])

        check_consistent_length(new, self._columns[name], names=(name, "sample"))

        columns = dict(self._columns)
        columns[name] = _readonly(new)
        return replace(self, _columns=columns)

    def __repr__(self) -> str:
        kinds = ", ".join(f"{k}:{v}" for k, v in self._kinds.items())
        return f"{type(self).__name__}(n={self.n_observations}, {kinds})"


@dataclass(frozen=True, eq=False)
class GroupedSample(Sample):
    """
    Sample with a designated categorical grouping variable.

    order names the two compared levels; order[0] is the level whose
    statistic comes first in a subtraction. Other levels may be present
    in the data and are ignored by difference statistics.

    Do not construct directly; use from_sample().
    """
    _group: str = ""
    _order: tuple[Any, Any] = ()

    @classmethod
    def from_sample(
        cls,
        sample: Sample,
        group: str,
        order: Sequence[Any] | None = None,
    ) -> GroupedSample:
        """
        Designate a grouping variable and the compared levels.

        Args:
            sample: The observed sample.
            group: Name of a categorical variable.
            order: Two distinct levels present in the data. Defaults to the
                first two observed levels in level order.

        Raises:
            InvalidParameterError: If group is not categorical or order does
                not resolve to exactly two levels present in the data.
            InsufficientDataError: If fewer than two levels are observed.
        """
        if sample.kind(group) != CATEGORICAL:
            raise InvalidParameterError(
                f"group variable {group!r} must be categorical, got numeric",
                parameter="group",
                value=group,
            )

        observed = sample.observed_levels(group)
        if len(observed) < 2:
            raise InsufficientDataError(
                f"group variable {group!r}: requires at least 2 distinct "
                f"observed levels, got {len(observed)}",
                parameter="group",
                required=2,
                available=len(observed),
            )

        resolved = resolve_order(order, observed, group)

        return cls(
            _columns=sample._columns,
            _kinds=sample._kinds,
            _levels=sample._levels,
            _group=group,
            _order=resolved,
        )

    @property
    def group(self) -> str:
        return self._group

    @property
    def order(self) -> tuple[Any, Any]:
        return self._order

    @property
    def metadata(self) -> dict[str, Any]:
        meta = super().metadata
        meta['group'] = self._group
        meta['order'] = self._order
        meta['group_sizes'] = self.group_sizes()
        return meta

    def group_sizes(self) -> dict[Any, int]:
        """Number of records per observed level of the grouping variable."""
        col = self._columns[self._group]
        return {
            lv: int(np.sum(col == lv))
            for lv in self.observed_levels(self._group)
        }

    def __repr__(self) -> str:
        return (
            f"GroupedSample(n={self.n_observations}, group={self._group!r}, "
            f"order={self._order!r})"
        )


def resolve_order(
    order: Sequence[Any] | None,
    observed: Sequence[Any],
    group: str,
) -> tuple[Any, Any]:
    """
    Resolve a two-level subtraction order against the observed levels.

    Raises:
        InvalidParameterError: Unless order names exactly two distinct
            levels that occur in the data.
    """
    if order is None:
        if len(observed) < 2:
            raise InsufficientDataError(
                f"group variable {group!r}: requires at least 2 distinct "
                f"observed levels, got {len(observed)}",
                parameter="group",
                required=2,
                available=len(observed),
            )
        return (observed[0], observed[1])

    if isinstance(order, (str, bytes)):
        raise InvalidParameterError(
            f"order must be a pair of levels, got {order!r}",
            parameter="order",
            value=order,
        )
    resolved = tuple(order)
    if len(resolved) != 2 or resolved[0] == resolved[1]:
        raise InvalidParameterError(
            f"order must name exactly two distinct levels of {group!r}, "
            f"got {resolved!r}",
            parameter="order",
            value=order,
        )
    absent = [lv for lv in resolved if lv not in observed]
    if absent:
        raise InvalidParameterError(
            f"order names levels {absent!r} that are absent from {group!r}; "
            f"observed levels: {tuple(observed)!r}",
            parameter="order",
            value=order,
        )
    return resolved
