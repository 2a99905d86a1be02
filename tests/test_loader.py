from __future__ import annotations

from pathlib import Path

import pytest

from protoredact.app.adapters import YAMLSchemaLoader
from protoredact.schema.loader import load_file_spec
from protoredact.schema.models import FileSpec, TypeRef


def test_loads_bundled_schema(user_schema_path: Path) -> None:
    spec = load_file_spec(user_schema_path)

    assert spec.name == "user/v1/user.proto"
    assert spec.go_import_path == "github.com/example/user/v1"
    assert spec.go_package_name == "userv1"
    assert spec.messages[0].messages[0].go_name == "User_Profile"


def test_name_defaults_to_file_name(write_schema) -> None:
    path = write_schema("billing.yaml", "package: billing.v1\n")
    assert load_file_spec(path).name == "billing.yaml"


def test_json_documents_are_accepted(write_schema) -> None:
    path = write_schema("billing.json", '{"package": "billing.v1", "messages": [{"name": "Invoice"}]}')
    spec = load_file_spec(path)

    assert spec.messages[0].full_name == "billing.v1.Invoice"


def test_missing_file(temp_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_file_spec(temp_dir / "missing.yaml")


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("", "empty"),
        ("- a\n- b\n", "mapping"),
        ("package: [unclosed\n", "Malformed"),
        ("package: a\nmessages:\n  - fields: []\n", "Invalid schema description"),
        (
            "package: a\nmessages:\n  - name: M\n    fields:\n      - name: f\n        kind: uuid\n",
            "Invalid schema description",
        ),
    ],
)
def test_invalid_documents(write_schema, content: str, match: str) -> None:
    path = write_schema("bad.yaml", content)
    with pytest.raises(ValueError, match=match):
        load_file_spec(path)


def test_unknown_annotation_keys_are_rejected(write_schema) -> None:
    content = (
        "package: a\n"
        "messages:\n"
        "  - name: M\n"
        "    fields:\n"
        "      - name: f\n"
        "        kind: string\n"
        "        redact:\n"
        "          redakt: true\n"
    )
    with pytest.raises(ValueError):
        load_file_spec(write_schema("typo.yaml", content))


def test_adapter_delegates_to_loader(user_schema_path: Path) -> None:
    spec = YAMLSchemaLoader().load(user_schema_path)
    assert isinstance(spec, FileSpec)


def test_go_package_name_fallbacks() -> None:
    assert FileSpec(name="a", package="a.v1", go_package="github.com/x/a/v1").go_package_name == "v1"
    assert FileSpec(name="a", package="corp.billing").go_package_name == "billing"


def test_find_message_in_imports(user_schema_path: Path) -> None:
    spec = load_file_spec(user_schema_path)

    address = spec.find_message(TypeRef(name="Address", import_path="github.com/example/common/v1"))
    assert address is not None
    assert address.name == "Address"
    assert spec.find_message(TypeRef(name="Address")) is None
    assert spec.find_message(TypeRef(name="User_Profile")) is not None
