"""Tests for LookupContext and the eval_* bridge helpers."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from tclcomplete.context import (
    GLOBAL_NAMESPACE,
    Evaluator,
    LookupContext,
    eval_bool,
    eval_in,
    eval_value,
)


class TestLookupContext:
    def test_defaults(self, fake):
        ctx = LookupContext(fake)
        assert ctx.interp == ""
        assert ctx.namespace == GLOBAL_NAMESPACE

    def test_empty_namespace_normalised(self, fake):
        assert LookupContext(fake, namespace="").namespace == "::"

    def test_none_namespace_normalised(self, fake):
        assert LookupContext(fake, namespace=None).namespace == "::"

    def test_none_interp_normalised(self, fake):
        assert LookupContext(fake, interp=None).interp == ""

    def test_frozen(self, fake):
        ctx = LookupContext(fake)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.namespace = "::app"

    def test_at_returns_copy(self, fake):
        ctx = LookupContext(fake, "child")
        moved = ctx.at("::app")
        assert moved.namespace == "::app"
        assert moved.interp == "child"
        assert moved.evaluator is fake
        assert ctx.namespace == "::"


def test_fake_satisfies_protocol(fake):
    assert isinstance(fake, Evaluator)


class TestEvalHelpers:
    def test_eval_in_forwards(self, ctx, fake):
        assert eval_in(ctx, "::info", "commands", "pu*") == ["puts"]
        assert fake.calls == [("", "::", ("::info", "commands", "pu*"))]

    def test_eval_bool(self, ctx):
        assert eval_bool(ctx, "::namespace", "exists", "::app") is True
        assert eval_bool(ctx, "::namespace", "exists", "::nope") is False

    def test_eval_value(self, ctx):
        assert eval_value(ctx, "::set", "obj") == "::greeter"

    def test_queries_logged_at_debug(self, ctx, caplog):
        with caplog.at_level(logging.DEBUG, logger="tclcomplete.context"):
            eval_in(ctx, "::info", "vars", "a*")
        assert "::info" in caplog.text
