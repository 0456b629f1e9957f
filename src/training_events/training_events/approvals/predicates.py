"""Boolean expression tree for attendance-record filters.

The same expression renders to a parameterised SQL ``WHERE`` fragment for
MySQL and evaluates in memory against a row mapping, so grouping is explicit
and the in-memory result matches the SQL one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

# Logical field name -> column in the joined trainingevent_users/trainingevent query.
COLUMNS = {
    "attendance_id": "tu.id",
    "user_id": "tu.userid",
    "event_id": "tu.trainingeventid",
    "company_id": "tu.companyid",
    "waitlisted": "tu.waitlisted",
    "approved": "tu.approved",
    "manager_ok": "tu.manager_ok",
    "tm_ok": "tu.tm_ok",
    "approval_type": "te.approvaltype",
}

SQL = Tuple[str, List[Any]]


class Expr:
    def matches(self, row: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def to_sql(self) -> SQL:
        raise NotImplementedError

    def __and__(self, other: "Expr") -> "Expr":
        return And(self, other)

    def __or__(self, other: "Expr") -> "Expr":
        return Or(self, other)


@dataclass(frozen=True)
class Field:
    name: str

    def __post_init__(self):
        if self.name not in COLUMNS:
            raise ValueError(f"Unknown field: {self.name!r}")

    @property
    def column(self) -> str:
        return COLUMNS[self.name]

    def value(self, row: Mapping[str, Any]) -> Any:
        return row[self.name]


@dataclass(frozen=True)
class Eq(Expr):
    field: Field
    value: Any

    def matches(self, row):
        return self.field.value(row) == self.value

    def to_sql(self):
        return f"{self.field.column} = %s", [self.value]


@dataclass(frozen=True)
class Ne(Expr):
    field: Field
    value: Any

    def matches(self, row):
        return self.field.value(row) != self.value

    def to_sql(self):
        return f"{self.field.column} != %s", [self.value]


@dataclass(frozen=True)
class In(Expr):
    field: Field
    values: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def matches(self, row):
        return self.field.value(row) in self.values

    def to_sql(self):
        if not self.values:
            # MySQL rejects "IN ()".
            return "1 = 0", []
        placeholders = ",".join(["%s"] * len(self.values))
        return f"{self.field.column} IN ({placeholders})", list(self.values)


@dataclass(frozen=True)
class Not(Expr):
    part: Expr

    def matches(self, row):
        return not self.part.matches(row)

    def to_sql(self):
        sql, params = self.part.to_sql()
        return f"NOT ({sql})", params


class _Junction(Expr):
    keyword = ""
    empty_sql = ""

    def __init__(self, *parts: Expr):
        self.parts: Tuple[Expr, ...] = tuple(parts)

    def __eq__(self, other):
        return type(self) is type(other) and self.parts == other.parts

    def __hash__(self):
        return hash((type(self).__name__, self.parts))

    def __repr__(self):
        return f"{type(self).__name__}{self.parts!r}"

    def to_sql(self):
        if not self.parts:
            return self.empty_sql, []
        fragments = []
        params: List[Any] = []
        for part in self.parts:
            sql, part_params = part.to_sql()
            fragments.append(f"({sql})")
            params.extend(part_params)
        return f" {self.keyword} ".join(fragments), params


class And(_Junction):
    keyword = "AND"
    empty_sql = "1 = 1"

    def matches(self, row):
        return all(p.matches(row) for p in self.parts)


class Or(_Junction):
    keyword = "OR"
    empty_sql = "1 = 0"

    def matches(self, row):
        return any(p.matches(row) for p in self.parts)


ATTENDANCE_ID = Field("attendance_id")
USER_ID = Field("user_id")
EVENT_ID = Field("event_id")
COMPANY_ID = Field("company_id")
APPROVED = Field("approved")
MANAGER_OK = Field("manager_ok")
TM_OK = Field("tm_ok")
APPROVAL_TYPE = Field("approval_type")
