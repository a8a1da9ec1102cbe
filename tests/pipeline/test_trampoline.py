"""Tests for the Bounce/trampoline loop."""

from continuator.pipeline.trampoline import Bounce, trampoline


def _countdown(n):
    if n == 0:
        return "done"
    return Bounce(_countdown, n - 1)


class TestTrampoline:
    def test_plain_value(self):
        assert trampoline(lambda x: x + 1, 1) == 2

    def test_deep_chain_constant_stack(self):
        assert trampoline(_countdown, 200_000) == "done"

    def test_callable_result_is_not_followed(self):
        def make_fn():
            return len

        assert trampoline(make_fn) is len

    def test_bounce_call(self):
        bounce = Bounce(max, 1, 5)
        assert bounce() == 5
        assert "max" in repr(bounce)
