import datetime
from enum import Enum
from typing import Optional

from hypothesis import given, strategies as st
from pydantic import BaseModel

from neo4j_model_service.domain.services.property_mapper import (
    IdentityPropertyMapper,
    PydanticPropertyMapper,
)

scalars = st.one_of(
    st.text(),
    st.integers(min_value=-(2**63), max_value=2**63 - 1),
    st.floats(allow_nan=False),
    st.booleans(),
)
property_bags = st.dictionaries(
    st.text(min_size=1), st.one_of(scalars, st.lists(st.text()), st.lists(st.integers()))
)


@given(property_bags)
def test_identity_mapper_round_trip(bag):
    mapper = IdentityPropertyMapper()
    assert mapper.from_storage(mapper.to_storage(bag)) == bag


def test_identity_mapper_returns_copies():
    mapper = IdentityPropertyMapper()
    bag = {"name": "Ada"}
    stored = mapper.to_storage(bag)
    stored["name"] = "Grace"
    assert bag == {"name": "Ada"}
    assert mapper.from_storage(bag) is not bag


class Role(str, Enum):
    ADMIN = "admin"
    VIEWER = "viewer"


class Address(BaseModel):
    city: str
    zip_code: str


class Person(BaseModel):
    name: str
    age: int
    role: Role = Role.VIEWER
    tags: list[str] = []
    born: Optional[datetime.date] = None
    address: Optional[Address] = None


def test_pydantic_mapper_flattens_model():
    person = Person(
        name="Ada",
        age=36,
        role=Role.ADMIN,
        tags=["math"],
        born=datetime.date(1815, 12, 10),
        address=Address(city="London", zip_code="W1"),
    )
    stored = PydanticPropertyMapper(Person).to_storage(person)
    assert stored == {
        "name": "Ada",
        "age": 36,
        "role": "admin",
        "tags": ["math"],
        "born": "1815-12-10",
        "address_json": '{"city": "London", "zip_code": "W1"}',
    }


def test_pydantic_mapper_round_trip():
    mapper = PydanticPropertyMapper(Person)
    person = Person(
        name="Ada", age=36, born=datetime.date(1815, 12, 10),
        address=Address(city="London", zip_code="W1"),
    )
    assert mapper.from_storage(mapper.to_storage(person)) == person


def test_pydantic_mapper_accepts_partial_mappings():
    mapper = PydanticPropertyMapper(Person)
    assert mapper.to_storage({"name": "Ada", "role": Role.ADMIN}) == {
        "name": "Ada",
        "role": "admin",
    }


class Document(BaseModel):
    title: str
    raw_json: str
    meta: dict = {}


def test_fields_ending_in_json_suffix_are_not_decoded():
    mapper = PydanticPropertyMapper(Document)
    plain = Document(title="t", raw_json="hello")
    encoded = Document(title="t", raw_json='{"a": 1}', meta={"k": "v"})

    assert mapper.from_storage(mapper.to_storage(plain)) == plain
    assert mapper.from_storage(mapper.to_storage(encoded)) == encoded
    assert mapper.to_storage(encoded)["raw_json"] == '{"a": 1}'
