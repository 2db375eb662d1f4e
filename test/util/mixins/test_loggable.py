# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import logging

import pytest

from wsledger.util.logging import Logger
from wsledger.util.mixins import LoggableMixin


class Sample(LoggableMixin):
    pass


class NamedSample(LoggableMixin):
    def __init__(self, name: str, parent: object = None) -> None:
        self.log_name = name
        self.log_parent = parent


@pytest.mark.mixins
class TestLoggableMixin:
    def test_instance_logger(self):
        sample = Sample()
        assert isinstance(sample.log, Logger)
        assert sample.log.name == "Sample"

    def test_class_logger(self):
        assert Sample.log.name == "T(Sample)"

    def test_named_logger(self):
        assert NamedSample("custom").log.name == "custom"

    def test_parent_logger(self):
        parent = NamedSample("outer")
        child = NamedSample("inner", parent=parent)
        assert child.log.name == "outer.inner"

    def test_logging(self, caplog):
        with caplog.at_level(logging.DEBUG):
            Sample().log.debug("hello from sample")
        assert "hello from sample" in caplog.text
