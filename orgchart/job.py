"""The job table."""

from orgchart.record import Column, Record


class Job(Record):
    """One row of the ``job`` table."""

    table_name = "job"
    columns = (
        Column("id", int, "integer", 4, auto=True, primary_key=True, not_null=True),
        Column("title", str, "character varying", 50, not_null=True),
    )