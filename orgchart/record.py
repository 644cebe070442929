"""Column-mapped records with JSON conversion, validation and SQL helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Sequence

_log = logging.getLogger(__name__)

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT32_SPAN = 2**32


class ValidationError(ValueError):
    """Raised when JSON input does not fit a record's columns."""


@dataclass(frozen=True)
class Column:
    """Description of one table column."""

    name: str
    type: type
    db_type: str
    length: int = 0
    auto: bool = False
    primary_key: bool = False
    not_null: bool = False


def _wrap_int32(value: int) -> int:
    return (value - _INT32_MIN) % _INT32_SPAN + _INT32_MIN


def _is_int32(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return _INT32_MIN <= value <= _INT32_MAX
    if isinstance(value, float):
        return value.is_integer() and _INT32_MIN <= value <= _INT32_MAX
    return False


def _coerce(column: Column, value: Any) -> Any:
    """Convert a JSON value to the column's Python type."""
    if column.type is int:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return _wrap_int32(int(value))
    elif column.type is str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value) if isinstance(value, int) else repr(value)
    else:
        return value
    raise ValidationError(f"Value {value!r} cannot be converted for the {column.name} column")


class _Field:
    """Attribute access to one column of a record."""

    def __init__(self, index: int, column: Column) -> None:
        self.index = index
        self.column = column

    def __get__(self, instance: "Record | None", owner: type | None = None) -> Any:
        if instance is None:
            return self.column
        return instance._values[self.index]

    def __set__(self, instance: "Record", value: Any) -> None:
        instance._values[self.index] = None if value is None else _coerce(self.column, value)
        instance._dirty[self.index] = True


class Record:
    """Base class for a row of a table described by ``columns``."""

    table_name: ClassVar[str] = ""
    columns: ClassVar[tuple[Column, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for index, column in enumerate(cls.columns):
            setattr(cls, column.name, _Field(index, column))

    def __init__(self, **kwargs: Any) -> None:
        self._values: list[Any] = [None] * len(self.columns)
        self._dirty: list[bool] = [False] * len(self.columns)
        names = {column.name for column in self.columns}
        for name, value in kwargs.items():
            if name not in names:
                raise TypeError(f"{type(self).__name__} has no column {name!r}")
            setattr(self, name, value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{column.name}={value!r}" for column, value in zip(self.columns, self._values)
        )
        return f"{type(self).__name__}({fields})"

    @classmethod
    def _aliases(cls, masquerade: Sequence[str] | None) -> list[str]:
        if masquerade is None:
            return [column.name for column in cls.columns]
        if len(masquerade) != len(cls.columns):
            raise ValidationError("Bad masquerading vector")
        return list(masquerade)

    @classmethod
    def from_json(cls, data: Mapping[str, Any], masquerade: Sequence[str] | None = None) -> "Record":
        """Build a record from a JSON object; present keys mark columns dirty."""
        record = cls()
        for index, (column, key) in enumerate(zip(cls.columns, cls._aliases(masquerade))):
            if key and key in data:
                record._dirty[index] = True
                value = data[key]
                if value is not None:
                    record._values[index] = _coerce(column, value)
        return record

    def update_by_json(self, data: Mapping[str, Any], masquerade: Sequence[str] | None = None) -> None:
        """Overwrite columns present in a JSON object; the primary key stays clean."""
        for index, (column, key) in enumerate(zip(self.columns, self._aliases(masquerade))):
            if key and key in data:
                if not column.primary_key:
                    self._dirty[index] = True
                value = data[key]
                if value is not None:
                    self._values[index] = _coerce(column, value)

    def to_json(self, masquerade: Sequence[str] | None = None) -> dict[str, Any]:
        """Return the record as a JSON object, null columns as None."""
        if masquerade is not None and len(masquerade) != len(self.columns):
            _log.error("Masquerade failed")
            masquerade = None
        keys = self._aliases(masquerade)
        return {key: value for key, value in zip(keys, self._values) if key}

    @classmethod
    def validate_for_creation(cls, data: Mapping[str, Any], masquerade: Sequence[str] | None = None) -> None:
        """Raise ValidationError unless ``data`` may create a new record."""
        for index, (column, key) in enumerate(zip(cls.columns, cls._aliases(masquerade))):
            if not key:
                continue
            if key in data:
                cls.validate_field(index, key, data[key], True)
            elif column.not_null and not column.auto:
                raise ValidationError(f"The {key} column cannot be null")

    @classmethod
    def validate_for_update(cls, data: Mapping[str, Any], masquerade: Sequence[str] | None = None) -> None:
        """Raise ValidationError unless ``data`` may update an existing record."""
        for index, (column, key) in enumerate(zip(cls.columns, cls._aliases(masquerade))):
            present = bool(key) and key in data
            if column.primary_key and not present:
                raise ValidationError(
                    "The value of primary key must be set in the json object for update"
                )
            if present:
                cls.validate_field(index, key, data[key], False)

    @classmethod
    def validate_field(cls, index: int, field_name: str, value: Any, for_creation: bool) -> None:
        """Raise ValidationError if ``value`` does not suit the column at ``index``."""
        if not 0 <= index < len(cls.columns):
            raise ValidationError("Internal error in the server")
        column = cls.columns[index]
        if value is None:
            if column.not_null:
                raise ValidationError(f"The {field_name} column cannot be null")
            return
        if for_creation and column.auto and column.primary_key:
            raise ValidationError("The automatic primary key cannot be set")
        if column.type is int:
            if not _is_int32(value):
                raise ValidationError(f"Type error in the {field_name} field")
        elif column.type is str:
            if not isinstance(value, str):
                raise ValidationError(f"Type error in the {field_name} field")
            if column.length and len(value.encode("utf-8")) > column.length:
                raise ValidationError(
                    f"String length exceeds limit for the {field_name} field "
                    f"(the maximum value is {column.length})"
                )

    @classmethod
    def column_name(cls, index: int) -> str:
        """Return the name of the column at ``index``."""
        if not 0 <= index < len(cls.columns):
            raise IndexError(f"column index {index} out of range")
        return cls.columns[index].name

    @classmethod
    def _primary_index(cls) -> int:
        for index, column in enumerate(cls.columns):
            if column.primary_key:
                return index
        raise LookupError(f"{cls.__name__} has no primary key")

    def primary_key(self) -> Any:
        """Return the primary key value; raise ValueError if it is null."""
        value = self._values[self._primary_index()]
        if value is None:
            raise ValueError("primary key is not set")
        return value

    def update_columns(self) -> list[str]:
        """Names of the changed columns an update writes."""
        return [
            column.name
            for column, dirty in zip(self.columns, self._dirty)
            if dirty and not column.primary_key
        ]

    def update_args(self) -> list[Any]:
        """Values bound to the columns named by ``update_columns``."""
        return [
            value
            for column, dirty, value in zip(self.columns, self._dirty, self._values)
            if dirty and not column.primary_key
        ]

    def insert_args(self) -> list[Any]:
        """Values bound to the placeholders of ``sql_for_inserting``."""
        return [
            value
            for column, dirty, value in zip(self.columns, self._dirty, self._values)
            if dirty and not column.auto
        ]

    def sql_for_inserting(self) -> tuple[str, bool]:
        """Return the insert statement and whether it returns the new row."""
        names: list[str] = []
        values: list[str] = []
        placeholder = 0
        for column, dirty in zip(self.columns, self._dirty):
            if column.auto:
                names.append(column.name)
                values.append("default")
            elif dirty:
                placeholder += 1
                names.append(column.name)
                values.append(f"${placeholder}")
        need_selection = any(column.auto for column in self.columns)
        sql = f"insert into {self.table_name} ({','.join(names)}) values ({','.join(values)})"
        sql += " returning *" if need_selection else ""
        return sql, need_selection

    @classmethod
    def sql_for_finding_by_primary_key(cls) -> str:
        """Return the statement selecting one row by primary key."""
        key = cls.columns[cls._primary_index()].name
        return f"select * from {cls.table_name} where {key} = $1"

    @classmethod
    def sql_for_deleting_by_primary_key(cls) -> str:
        """Return the statement deleting one row by primary key."""
        key = cls.columns[cls._primary_index()].name
        return f"delete from {cls.table_name} where {key} = $1"