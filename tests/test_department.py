import pytest

from orgchart.department import Department
from orgchart.record import ValidationError


def test_empty_department_json():
    assert Department().to_json() == {"id": None, "name": None}


def test_round_trip():
    data = {"id": 2, "name": "Sales"}
    assert Department.from_json(data).to_json() == data


def test_sql_for_finding_and_deleting():
    assert Department.sql_for_finding_by_primary_key() == "select * from department where id = $1"
    assert Department.sql_for_deleting_by_primary_key() == "delete from department where id = $1"


def test_sql_for_inserting_with_name():
    sql, need_selection = Department(name="Sales").sql_for_inserting()
    assert sql == "insert into department (id,name) values (default,$1) returning *"
    assert need_selection is True


def test_sql_for_inserting_without_name():
    sql, _ = Department().sql_for_inserting()
    assert sql == "insert into department (id) values (default) returning *"


def test_column_names():
    assert [Department.column_name(i) for i in range(2)] == ["id", "name"]


def test_creation_requires_name():
    with pytest.raises(ValidationError) as info:
        Department.validate_for_creation({})
    assert str(info.value) == "The name column cannot be null"


def test_creation_name_length_limit():
    Department.validate_for_creation({"name": "x" * 50})
    with pytest.raises(ValidationError) as info:
        Department.validate_for_creation({"name": "x" * 51})
    assert str(info.value) == (
        "String length exceeds limit for the name field (the maximum value is 50)"
    )


def test_creation_rejects_null_name():
    with pytest.raises(ValidationError) as info:
        Department.validate_for_creation({"name": None})
    assert str(info.value) == "The name column cannot be null"


def test_masqueraded_creation_uses_alias():
    with pytest.raises(ValidationError) as info:
        Department.validate_for_creation({}, ["", "title"])
    assert str(info.value) == "The title column cannot be null"


def test_masqueraded_update_needs_key_alias():
    with pytest.raises(ValidationError) as info:
        Department.validate_for_update({"id": 1}, ["", "name"])
    assert str(info.value) == "The value of primary key must be set in the json object for update"


def test_update_changes_name_only():
    department = Department.from_json({"id": 5, "name": "Old"})
    department.update_by_json({"name": "New"})
    assert department.primary_key() == 5
    assert department.update_columns() == ["name"]
    assert department.update_args() == ["New"]


def test_setting_name_marks_dirty():
    department = Department()
    assert department.update_columns() == []
    department.name = "Ops"
    assert department.update_columns() == ["name"]
    assert department.insert_args() == ["Ops"]