"""Tests for compose — merging one registry into another."""

from __future__ import annotations

from continuator.pipeline.composition import compose
from continuator.pipeline.registry import StepRegistry
from continuator.pipeline.step_id import Index, Name


def _a(value, advance, halt, jump):
    advance(value + "a")


def _b(value, advance, halt, jump):
    advance(value + "b")


def _c(value, advance, halt, jump):
    advance(value + "c")


class TestCompose:
    def test_unnamed_steps_appended(self):
        target = StepRegistry([_a])
        compose(target, StepRegistry([_b, _c]))
        assert target.steps == (_a, _b, _c)
        assert target.identifier_of(2) == Index(2)

    def test_new_name_appended_and_mapped(self):
        target = StepRegistry([_a])
        compose(target, StepRegistry({"x": _b}))
        assert target.resolve("x") == 1
        assert target.step_at(1) is _b

    def test_collision_with_overwrite_replaces_in_place(self):
        target = StepRegistry({"x": _a, "y": _b})
        compose(target, StepRegistry({"x": _c}), overwrite=True)
        assert len(target) == 2
        assert target.resolve("x") == 0
        assert target.step_at(0) is _c

    def test_collision_without_overwrite_appends_unnamed(self):
        target = StepRegistry({"x": _a})
        compose(target, StepRegistry({"x": _c}))
        assert len(target) == 2
        assert target.step_at(0) is _a
        assert target.resolve("x") == 0
        assert target.identifier_of(1) == Index(1)
        assert target.step_at(1) is _c

    def test_source_unchanged(self):
        source = StepRegistry({"x": _b})
        compose(StepRegistry({"x": _a}), source, overwrite=True)
        assert source.steps == (_b,)
        assert source.names == {"x": 0}

    def test_existing_order_preserved(self):
        target = StepRegistry().add_step(_a).add_named_step("n", _b)
        compose(target, StepRegistry().add_step(_c).add_named_step("n", _a), overwrite=True)
        assert target.steps == (_a, _a, _c)
        assert target.identifier_of(1) == Name("n")

    def test_returns_target(self):
        target = StepRegistry()
        assert compose(target, StepRegistry([_a])) is target

    def test_self_composition_terminates(self):
        registry = StepRegistry([_a, _b])
        compose(registry, registry)
        assert registry.steps == (_a, _b, _a, _b)

    def test_method_form(self):
        target = StepRegistry([_a])
        assert target.compose(StepRegistry([_b])) is target
        assert len(target) == 2

    def test_into_empty_keeps_count_and_names(self):
        source = (
            StepRegistry()
            .add_named_step("first", _a)
            .add_step(_b)
            .add_named_step("third", _c)
            .add_step(_a)
        )
        target = compose(StepRegistry(), source)
        assert len(target) == len(source)
        assert target.names == source.names
        assert target.step_ids == source.step_ids
        assert target.steps == source.steps

    def test_large_named_registry(self):
        size = 20_000
        source = StepRegistry({f"s{i}": _a for i in range(size)})
        target = compose(StepRegistry(), source)
        assert len(target) == size
        assert target.identifier_of(size - 1) == Name(f"s{size - 1}")
