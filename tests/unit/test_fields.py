# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from s3_request import Field, Fields
from s3_request._http import split_metadata_name


def test_field_single_valued_basics() -> None:
    field = Field(name="x-amz-meta-fname", values=["fval"])
    assert field.name == "x-amz-meta-fname"
    assert field.values == ["fval"]
    assert field.as_string() == "fval"
    assert field.as_tuples() == [("x-amz-meta-fname", "fval")]


def test_field_multi_valued_basics() -> None:
    field = Field(name="fname", values=["fval1", "fval2"])
    assert field.values == ["fval1", "fval2"]
    assert field.as_string() == "fval1,fval2"
    assert field.as_tuples() == [("fname", "fval1"), ("fname", "fval2")]


@pytest.mark.parametrize(
    "values,expected",
    [
        ([], ""),
        (["val1"], "val1"),
        # Newlines are dropped and every value is trimmed.
        (["a\n", "b "], "a,b"),
        (["  padded  "], "padded"),
        (["multi\nline\nvalue"], "multilinevalue"),
        # Values are never quoted or escaped.
        (["val1", "val2,val3", "val4"], "val1,val2,val3,val4"),
        (['"quoted"', "val2"], '"quoted",val2'),
        (["joe@johnsmith.net", "jane@johnsmith.net"], "joe@johnsmith.net,jane@johnsmith.net"),
    ],
)
def test_field_serialization(values: list[str], expected: str) -> None:
    field = Field(name="_", values=values)
    assert field.as_string() == expected


def test_field_remove_and_set() -> None:
    field = Field(name="fname", values=["a", "b", "a"])
    field.remove("a")
    assert field.values == ["b"]
    field.remove("missing")
    assert field.values == ["b"]
    field.set(["c", "d"])
    assert field.values == ["c", "d"]


def test_fields_lookup_is_case_insensitive() -> None:
    fields = Fields([Field(name="X-Amz-Meta-Color", values=["blue"])])
    assert "x-amz-meta-color" in fields
    assert fields["X-AMZ-META-COLOR"].values == ["blue"]
    assert fields.get("x-amz-meta-size") is None


def test_fields_add_keeps_first_spelling_and_value_order() -> None:
    fields = Fields()
    fields.add("x-amz-meta-Reviewer", "joe")
    fields.add("X-AMZ-META-REVIEWER", "jane")
    assert len(fields) == 1
    assert fields["x-amz-meta-reviewer"].name == "x-amz-meta-Reviewer"
    assert fields.as_headers() == {"x-amz-meta-Reviewer": "joe,jane"}


def test_fields_canonical_items_are_lowered_and_sorted() -> None:
    fields = Fields()
    fields.add("X-Amz-Meta-Zeta", "z")
    fields.add("x-amz-acl", "public-read")
    fields.add("x-amz-meta-Alpha", "a\n")
    fields.add("x-amz-meta-alpha", " b")
    assert fields.canonical_items() == [
        ("x-amz-acl", "public-read"),
        ("x-amz-meta-alpha", "a,b"),
        ("x-amz-meta-zeta", "z"),
    ]


def test_fields_delete() -> None:
    fields = Fields([Field(name="x-amz-acl", values=["private"])])
    del fields["X-Amz-Acl"]
    assert len(fields) == 0
    assert list(fields) == []


def test_repeated_initial_field_names_rejected() -> None:
    with pytest.raises(ValueError):
        Fields(
            [
                Field(name="x-amz-meta-a", values=["1"]),
                Field(name="X-AMZ-META-A", values=["2"]),
            ]
        )


def test_setitem_with_mismatched_name_rejected() -> None:
    fields = Fields()
    with pytest.raises(ValueError):
        fields["x-amz-meta-a"] = Field(name="x-amz-meta-b", values=["1"])


@pytest.mark.parametrize(
    "name,expected",
    [
        ("x-amz-meta-color", "color"),
        ("X-Amz-Meta-Color", "Color"),
        ("x-amz-meta-", ""),
        ("x-amz-request-id", None),
        ("Content-Type", None),
    ],
)
def test_split_metadata_name(name: str, expected: str | None) -> None:
    assert split_metadata_name(name) == expected
