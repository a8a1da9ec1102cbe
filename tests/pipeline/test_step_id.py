"""Tests for step identifiers — Index, Name, conversion and name validation."""

import pytest

from continuator.pipeline.step_id import Index, Name, as_step_id, is_valid_name


class TestIdentifiers:
    def test_index_and_name_never_equal(self):
        assert Index(3) != Name("3")

    def test_hashable(self):
        assert {Index(0): "a", Name("x"): "b"}[Name("x")] == "b"

    def test_str(self):
        assert str(Index(4)) == "4"
        assert str(Name("parse")) == "parse"


class TestAsStepId:
    def test_int_becomes_index(self):
        assert as_step_id(2) == Index(2)

    def test_str_becomes_name(self):
        assert as_step_id("double") == Name("double")

    def test_numeric_string_stays_a_name(self):
        assert as_step_id("2") == Name("2")

    def test_identifiers_pass_through(self):
        ident = Name("x")
        assert as_step_id(ident) is ident

    @pytest.mark.parametrize("ref", [True, 1.5, None, ["a"]])
    def test_other_types_rejected(self, ref):
        with pytest.raises(TypeError):
            as_step_id(ref)


class TestIsValidName:
    @pytest.mark.parametrize("name", ["double", "addOne", "step-2", "v1"])
    def test_valid(self, name):
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["", "   ", "3", "-1", "+7", "2.5", " 10 "])
    def test_invalid(self, name):
        assert not is_valid_name(name)

    def test_non_string(self):
        assert not is_valid_name(3)
