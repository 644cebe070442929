# orgchart

Records for the departments and jobs of an organisation chart: building
them from JSON and turning them back into JSON, validating incoming data,
and storing them in a SQLite database. Only the standard library is used.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Records

`orgchart.department.Department` (table `department`, columns `id` and
`name`) and `orgchart.job.Job` (table `job`, columns `id` and `title`) are
subclasses of `orgchart.record.Record`. The `id` column is an automatic
integer primary key; `name` and `title` are strings of at most 50 bytes
that may not be null.

```python
from orgchart.department import Department

dept = Department.from_json({"name": "Sales"})
dept.to_json()                # {"id": None, "name": "Sales"}
dept.name = "Marketing"
dept.update_columns()         # ["name"]
dept.update_args()            # ["Marketing"]
```

Columns can be read and set as attributes. Keys present in the JSON passed
to `from_json` mark their columns as changed; `update_by_json` overwrites
the columns it finds but never marks the primary key as changed. Both take
an optional list of aliases (one per column, an empty string to skip a
column) in place of the column names; a list of the wrong length raises
`ValidationError("Bad masquerading vector")`. `to_json` falls back to the
column names when given such a list.

### Validation

```python
from orgchart.department import Department
from orgchart.record import ValidationError

Department.validate_for_creation({"name": "Sales"})     # passes
Department.validate_for_creation({"id": 3, "name": "x"})
# ValidationError: The automatic primary key cannot be set
Department.validate_for_update({"name": "Sales"})
# ValidationError: The value of primary key must be set in the json object for update
```

Other messages are `The <field> column cannot be null`,
`Type error in the <field> field` and
`String length exceeds limit for the <field> field (the maximum value is 50)`.

### SQL helpers

`sql_for_inserting()` returns the insert statement and whether it returns
the new row, for example
`("insert into department (id,name) values (default,$1) returning *", True)`.
`sql_for_finding_by_primary_key()` and `sql_for_deleting_by_primary_key()`
give the `select` and `delete` statements by `id`; `primary_key()` returns
the key value and raises `ValueError` while it is unset.

## Storage

`orgchart.repository.Repository` keeps records in SQLite (`":memory:"` by
default) and can be used as a context manager.

```python
from orgchart.department import Department
from orgchart.repository import Repository, NotFoundError

with Repository("org_chart.db") as repo:
    repo.create_schema()
    sales = repo.insert(Department(name="Sales"))     # id filled in
    sales.name = "Marketing"
    repo.update(sales)                                # rows updated
    repo.find_all(Department, order_by="name", descending=True, offset=0, limit=25)
    repo.find_by_primary_key(Department, sales.id)
    repo.delete_by_primary_key(Department, sales.id)  # rows deleted
```

`find_by_primary_key` raises `NotFoundError` when no row matches. Errors
from SQLite, and ordering by a column the model does not have, raise
`DatabaseError`. `find_all` orders by the primary key unless told
otherwise and returns every row when `limit` is `None`.

## What this package does not do

There is no HTTP server and no command-line program: nothing here listens
on a port or serves the records over HTTP. Only departments and jobs are
modelled; there are no person records and no user accounts or login.