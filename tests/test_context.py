"""Tests for the per-invocation operation context."""

import logging

from file_provider.context import OperationContext


def test_preview_and_apply():
    assert OperationContext.preview("cfg").dry_run is True
    assert OperationContext.apply("cfg").dry_run is False


def test_log_messages_carry_resource_name(caplog):
    ctx = OperationContext.apply("cfg")

    with caplog.at_level(logging.INFO, logger="file_provider"):
        ctx.log.info("hello")

    assert caplog.records[-1].getMessage() == "[cfg] hello"


def test_log_without_resource_name_is_unprefixed(caplog):
    ctx = OperationContext.apply()

    with caplog.at_level(logging.INFO, logger="file_provider"):
        ctx.log.info("hello")

    assert caplog.records[-1].getMessage() == "hello"
