"""Tests for minimal scalar field selection."""

import pytest

from dartql.core.parser import SchemaParser
from dartql.core.scalars import ScalarCandidate, minimal_scalar_fields

SDL = """
enum Status { ACTIVE INACTIVE }

type Profile {
  id: ID!
  name: String!
  bio: String
  age: Int
  nickname: String
  note: String
}

type Tagged {
  tags: [String!]
  status: Status!
  label: String
}

type Wrapper {
  profile: Profile
  status: Status
}

type Query {
  profile: Profile
  tagged: Tagged
  wrapper: Wrapper
}
"""


@pytest.fixture
def schema():
    return SchemaParser.from_sdl(SDL)


class TestScalarCandidate:
    """Tests for the scoring heuristic."""

    def test_non_null_identifying_short_name(self):
        assert ScalarCandidate("id", non_null=True).score == 3.5

    def test_identifying_long_name(self):
        assert ScalarCandidate("nickname", non_null=False).score == 1

    def test_short_name_only(self):
        assert ScalarCandidate("bio", non_null=False).score == 0.5

    def test_no_bonus(self):
        assert ScalarCandidate("description", non_null=False).score == 0


class TestMinimalScalarFields:
    """Tests for minimal_scalar_fields."""

    def test_non_null_fields_plus_three_nullable(self, schema):
        assert minimal_scalar_fields("Profile", schema) == [
            "id",
            "name",
            "nickname",
            "bio",
            "age",
        ]

    def test_is_deterministic(self, schema):
        first = minimal_scalar_fields("Profile", schema)
        for _ in range(5):
            assert minimal_scalar_fields("Profile", schema) == first

    def test_non_null_inside_list_counts(self, schema):
        # Enums are not scalars and are never picked
        assert minimal_scalar_fields("Tagged", schema) == ["tags", "label"]

    def test_unknown_type_falls_back_to_id(self, schema):
        assert minimal_scalar_fields("Missing", schema) == ["id"]

    def test_type_without_scalars_falls_back_to_id(self, schema):
        assert minimal_scalar_fields("Wrapper", schema) == ["id"]

    def test_non_composite_type_falls_back_to_id(self, schema):
        assert minimal_scalar_fields("Status", schema) == ["id"]
