"""Shared pytest fixtures for typegrammar tests."""

import pytest

from typegrammar.core import ir


@pytest.fixture
def address_record() -> ir.RecordSpec:
    """Return a two-property record."""
    return ir.RecordSpec(
        name="PostalAddress",
        properties=[
            ir.PropertySpec(name="streetNumber", type=ir.TypeExpr.of("number")),
            ir.PropertySpec(name="street", type=ir.TypeExpr.of("string")),
        ],
    )


@pytest.fixture
def color_enum() -> ir.EnumSpec:
    """Return an enumeration of string literals."""
    return ir.EnumSpec(
        name="Color",
        members=[
            ir.EnumMemberSpec(name="RED", value="red"),
            ir.EnumMemberSpec(name="BLUE", value="blue"),
        ],
    )


@pytest.fixture
def candidate_schema() -> ir.SchemaSpec:
    """Return a schema where one record holds an array of another."""
    return ir.SchemaSpec(
        declarations=[
            ir.RecordSpec(
                name="JobCandidate",
                properties=[
                    ir.PropertySpec(name="name", type=ir.TypeExpr.of("string")),
                    ir.PropertySpec(
                        name="workExperience", type=ir.TypeExpr.of("WorkExperience[]")
                    ),
                ],
            ),
            ir.RecordSpec(
                name="WorkExperience",
                properties=[
                    ir.PropertySpec(name="company", type=ir.TypeExpr.of("string")),
                    ir.PropertySpec(name="position", type=ir.TypeExpr.of("string")),
                ],
            ),
        ]
    )


CAR_SOURCE = """\
// Cars and their owners
export enum Color { RED = "red", BLUE = "blue" }

interface Owner {
  name: string;
  age: number;
}

interface Car {
  make: string;
  colors: string[];
  paint: Color | string;
  owners: Array<Owner>;
}
"""


@pytest.fixture
def car_source() -> str:
    """Return declaration source with an enum, a union and a record array."""
    return CAR_SOURCE
