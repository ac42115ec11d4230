import pytest
from pydantic import ValidationError

from walloffame.contributors.schema import (
    GITHUB_PATTERN,
    ChangedFile,
    Contributor,
    export_json_schema,
)


def test_schema_lists_fields_with_patterns():
    schema = export_json_schema()
    props = schema["properties"]
    assert list(props) == ["fullName", "rollNumber", "github"]
    assert props["github"]["pattern"] == GITHUB_PATTERN


def test_dump_key_order():
    c = Contributor(fullName="A B", rollNumber="24bca001", github="ab")
    assert list(c.model_dump()) == ["fullName", "rollNumber", "github"]


def test_extra_fields_forbidden():
    with pytest.raises(ValidationError):
        Contributor(fullName="A B", rollNumber="24bca001", github="ab", email="x")


def test_changed_file_defaults():
    f = ChangedFile.model_validate({"filename": "submissions/ab.json", "sha": "1"})
    assert f.status == "modified"
