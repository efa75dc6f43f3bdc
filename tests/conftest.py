"""
Pytest configuration and shared fixtures for Scrivener tests.

This module provides common test fixtures, configuration, and utilities
used across the test suite.
"""

import io
import pytest
import tempfile
import shutil
from typing import Dict, Optional

from scrivener.annotations import (
    AnnotationDeclaration,
    PackageDeclaration,
    StructDeclaration,
    TypeDeclaration,
)
from scrivener.codegen.nodes import Declaration, write_bytes
from scrivener.codegen.templates import TemplateBinder, TemplateStore, set_template_binder
from scrivener.utils.config import ScrivenerConfig, set_config
from scrivener.utils.logging import setup_logging


MOB_TEMPLATE = "func Add(m {{select TYPE1}}, n {{select TYPE2}}) {{select TYPE3}} {\n}"
MOB_BODY = "func Add(m int32, n int32) int64 {\n}"


@pytest.fixture(scope="session")
def temp_test_dir():
    """Create temporary directory for test artifacts."""
    temp_dir = tempfile.mkdtemp(prefix="scrivener_test_")
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_globals(monkeypatch, tmp_path):
    """Give every test fresh configuration and template binder state."""
    for var in (
        "SCRIVENER_CONFIG",
        "SCRIVENER_TEMPLATE_DIR",
        "SCRIVENER_TEMPLATE_CACHE_SIZE",
        "SCRIVENER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)

    set_config(ScrivenerConfig(str(tmp_path / "absent.json")))
    set_template_binder(None)
    yield
    set_config(None)
    set_template_binder(None)
    setup_logging(level="INFO")


@pytest.fixture
def default_config(tmp_path):
    """Configuration with every section at its defaults."""
    return ScrivenerConfig(str(tmp_path / "absent.json"))


@pytest.fixture
def binder_for(default_config):
    """Factory building a binder over in-memory template assets."""

    def build(assets: Optional[Dict[str, str]] = None) -> TemplateBinder:
        return TemplateBinder(TemplateStore(assets or {}), default_config)

    return build


# Test nodes
class FailingNode(Declaration):
    """Node that writes a prefix and then raises."""

    def __init__(self, prefix: bytes = b"", error: Optional[Exception] = None):
        self.prefix = prefix
        self.error = error or RuntimeError("render failed")

    def write_to(self, sink) -> int:
        write_bytes(sink, self.prefix)
        raise self.error


class EndOfStreamNode(Declaration):
    """Node that writes its bytes and then signals end of stream."""

    def __init__(self, data: bytes):
        self.data = data

    def write_to(self, sink) -> int:
        write_bytes(sink, self.data)
        raise EOFError()


class FailingSink(io.RawIOBase):
    """Sink whose writes always fail."""

    def writable(self):
        return True

    def write(self, data):
        raise OSError("disk full")


@pytest.fixture
def failing_sink():
    return FailingSink()


# Front-end fixtures
def templater(companion_id: str, template: str = MOB_TEMPLATE, **params) -> AnnotationDeclaration:
    """Build a companion ``@templater`` annotation."""
    return AnnotationDeclaration("templater", {"id": companion_id, **params}, template)


def types_for(companion_id: Optional[str] = "Mob", **params) -> AnnotationDeclaration:
    """Build a triggering ``@templaterTypesFor`` annotation."""
    base = {"TYPE1": "int32", "TYPE2": "int32", "TYPE3": "int64"}
    if companion_id is not None:
        base["id"] = companion_id
    base.update(params)
    return AnnotationDeclaration("templaterTypesFor", base)


@pytest.fixture
def mob_package():
    """Package holding a Mob companion and a struct triggering it."""

    def build(kind: str = "go", trigger: Optional[AnnotationDeclaration] = None) -> PackageDeclaration:
        return PackageDeclaration(
            name="mob",
            path="github.com/example/mob",
            annotations=(templater("Mob", kind=kind),),
            declarations=(
                TypeDeclaration("Count", "int"),
                StructDeclaration("Mob", annotations=(trigger or types_for(),)),
            ),
        )

    return build
