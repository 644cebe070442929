"""The department table."""

from orgchart.record import Column, Record


class Department(Record):
    """One row of the ``department`` table."""

    table_name = "department"
    columns = (
        Column("id", int, "integer", 4, auto=True, primary_key=True, not_null=True),
        Column("name", str, "character varying", 50, not_null=True),
    )