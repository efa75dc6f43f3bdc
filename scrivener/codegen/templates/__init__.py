"""
Template binding for code synthesis.

This module binds Jinja2 template source to records of named fields
and holds the packaged template assets used by the structural nodes.
"""

from .store import TemplateStore, default_store, PACKAGED_TEMPLATE_DIR
from .renderer import (
    TemplateBinder,
    TemplateCache,
    SourceText,
    get_template_binder,
    set_template_binder,
    standard_helpers,
    make_select_helper,
    rewrite_shorthand,
)

__all__ = [
    "TemplateStore",
    "default_store",
    "PACKAGED_TEMPLATE_DIR",
    "TemplateBinder",
    "TemplateCache",
    "SourceText",
    "get_template_binder",
    "set_template_binder",
    "standard_helpers",
    "make_select_helper",
    "rewrite_shorthand",
]
