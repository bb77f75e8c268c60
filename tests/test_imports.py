import pytest

from oapigen.imports import (
    GoImport,
    construct_import_mapping,
    go_imports,
    iter_import_lines,
    merge_imports,
)


def test_empty_mapping_gives_empty_result():
    assert construct_import_mapping({}) == {}
    assert construct_import_mapping(None) == {}


def test_every_spec_path_is_mapped():
    mapping = {"a.yaml": "github.com/one", "b.yaml": "github.com/two"}
    result = construct_import_mapping(mapping)
    assert set(result) == set(mapping)
    for spec_path, imp in result.items():
        assert imp.path == mapping[spec_path]


def test_same_package_shares_a_name():
    result = construct_import_mapping(
        {"a.yaml": "github.com/shared", "b.yaml": "github.com/shared"}
    )
    assert result["a.yaml"].name == result["b.yaml"].name


def test_distinct_packages_get_distinct_names():
    mapping = {
        "a.yaml": "github.com/p1",
        "b.yaml": "github.com/p2",
        "c.yaml": "github.com/p3",
        "d.yaml": "github.com/p1",
    }
    result = construct_import_mapping(mapping)
    names = {imp.name for imp in result.values()}
    assert len(names) == len(set(mapping.values()))
    assert all(name.startswith("externalRef") for name in names)


def test_names_follow_sorted_package_order():
    result = construct_import_mapping(
        {"first.yaml": "github.com/zzz", "second.yaml": "github.com/aaa"}
    )
    assert result["second.yaml"].name == "externalRef0"
    assert result["first.yaml"].name == "externalRef1"


def test_naming_does_not_depend_on_insertion_order():
    forward = construct_import_mapping({"x": "pkg/b", "y": "pkg/a"})
    backward = construct_import_mapping({"y": "pkg/a", "x": "pkg/b"})
    assert forward == backward


def test_import_string_with_name():
    assert str(GoImport(name="myuuid", path="github.com/google/uuid")) == (
        'myuuid "github.com/google/uuid"'
    )


def test_import_string_without_name():
    assert str(GoImport(path="github.com/google/uuid")) == '"github.com/google/uuid"'


@pytest.mark.parametrize(
    "path, expected",
    [
        ('a"b', '"a\\"b"'),
        ("a\\b", '"a\\\\b"'),
        ("a\nb", '"a\\nb"'),
    ],
)
def test_import_string_escapes(path, expected):
    assert str(GoImport(path=path)) == expected


def test_go_imports_lists_every_statement():
    mapping = {
        "a": GoImport(name="ext", path="github.com/x"),
        "b": GoImport(path="github.com/y"),
    }
    assert sorted(go_imports(mapping)) == sorted(str(v) for v in mapping.values())
    assert go_imports({}) == []


def test_go_imports_of_constructed_mapping():
    lines = go_imports(construct_import_mapping({"spec.yaml": "github.com/only"}))
    assert lines == ['externalRef0 "github.com/only"']


def test_merge_imports_later_wins():
    first = {"k": GoImport(name="a", path="p1"), "only1": GoImport(path="q")}
    second = {"k": GoImport(name="b", path="p2")}
    merged = merge_imports(first, second)
    assert merged["k"] == second["k"]
    assert merged["only1"] == first["only1"]
    assert set(merged) == {"k", "only1"}


def test_merge_imports_ignores_missing_and_leaves_inputs_alone():
    first = {"k": GoImport(path="p")}
    merged = merge_imports(None, first, {})
    assert merged == first
    merged["new"] = GoImport(path="z")
    assert "new" not in first
    assert merge_imports() == {}


def test_iter_import_lines_chains_mappings():
    one = {"a": GoImport(path="p1")}
    two = {"b": GoImport(name="n", path="p2")}
    assert list(iter_import_lines(one, None, two)) == go_imports(one) + go_imports(two)