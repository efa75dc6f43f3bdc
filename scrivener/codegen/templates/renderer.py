"""
Template Binding Engine.

This module binds template source to a record of named fields and
writes the result into a sink. It uses Jinja2 with strict undefined
handling, so a template that names a field the binding lacks fails
instead of silently rendering nothing. Helper functions such as
``select`` are supplied per render call and never registered globally.
"""

from __future__ import annotations

import dataclasses
import re
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from jinja2 import Environment, StrictUndefined, Template, TemplateError, TemplateSyntaxError

from ..nodes import Declaration, write_bytes
from ...utils.config import ScrivenerConfig, get_config
from ...utils.constants import TemplateId
from ...utils.exceptions import TemplateParseError, TemplateRenderError, TemplateNotFoundError
from ...utils.logging import ScrivenerLogger
from ...utils.string_utils import indent_text, quote_string
from .store import TemplateStore, default_store

STANDARD_HELPERS = ("select", "sel")

# Words that make an expression real Jinja rather than a shorthand call
JINJA_KEYWORDS = frozenset(
    ["if", "else", "elif", "and", "or", "not", "in", "is", "for", "true", "false", "none"]
)

_SHORTHAND_PATTERN = re.compile(
    r"\{\{(-?)\s*([A-Za-z_]\w*)((?:\s+(?!-\}\})(?:\"[^\"]*\"|(?:[^\s{}()\"'|,-]|-(?!\}\}))+))+)\s*(-?)\}\}"
)
_ARGUMENT_PATTERN = re.compile(r"\"[^\"]*\"|[^\s{}()\"'|,]+")


def rewrite_shorthand(source: str, helper_names: Iterable[str]) -> str:
    """
    Rewrite space-separated helper calls into Jinja call syntax.

    ``{{select TYPE1}}`` becomes ``{{ select("TYPE1") }}``. Only names in
    helper_names are rewritten; bare words become string arguments and
    quoted arguments are kept as is. Expressions containing Jinja
    keywords are left untouched.

    Args:
        source: Template source
        helper_names: Names of the helpers available to the render

    Returns:
        Rewritten template source
    """
    names = frozenset(helper_names)
    if not names:
        return source

    def replace(match: "re.Match") -> str:
        open_trim, helper, raw_args, close_trim = match.groups()
        if helper not in names:
            return match.group(0)

        arguments = _ARGUMENT_PATTERN.findall(raw_args)
        if any(arg.lower() in JINJA_KEYWORDS for arg in arguments):
            return match.group(0)

        rendered = ", ".join(arg if arg.startswith('"') else f'"{arg}"' for arg in arguments)
        return f"{{{{{open_trim} {helper}({rendered}) {close_trim}}}}}"

    return _SHORTHAND_PATTERN.sub(replace, source)


def make_select_helper(params: Mapping[str, str]) -> Callable[[str], str]:
    """Return a helper looking keys up in params, yielding "" when absent."""

    def select(key: str) -> str:
        return params.get(key, "")

    return select


def standard_helpers(params: Mapping[str, str]) -> Dict[str, Callable]:
    """Return the standard helper set (``select`` and its alias ``sel``) over params."""
    select = make_select_helper(params)
    return {"select": select, "sel": select}


def binding_to_context(binding: Any) -> Dict[str, Any]:
    """
    Turn a binding record into template variables.

    Mappings are copied, dataclass instances contribute their fields and
    any other object contributes its public attributes.
    """
    if binding is None:
        return {}
    if isinstance(binding, Mapping):
        return dict(binding)
    if dataclasses.is_dataclass(binding) and not isinstance(binding, type):
        return {f.name: getattr(binding, f.name) for f in dataclasses.fields(binding)}
    return {key: value for key, value in vars(binding).items() if not key.startswith("_")}


class TemplateCache:
    """
    Bounded, thread-safe LRU cache of parsed templates.

    Clearing the cache never changes rendered output; a size of zero
    disables caching.
    """

    def __init__(self, max_size: int = 128):
        self.max_size = max_size
        self._entries: "OrderedDict[Tuple[str, Tuple[str, ...]], Template]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key) -> Optional[Template]:
        with self._lock:
            template = self._entries.get(key)
            if template is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return template

    def put(self, key, template: Template) -> None:
        if self.max_size <= 0:
            return
        with self._lock:
            self._entries[key] = template
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class TemplateBinder:
    """Jinja2-based template binder for code synthesis."""

    def __init__(
        self,
        store: Optional[TemplateStore] = None,
        config: Optional[ScrivenerConfig] = None,
        required: Iterable[str] = (),
    ):
        """
        Initialize the binder.

        Args:
            store: Template asset store; defaults to an empty store
            config: Configuration supplying parse options and cache size
            required: Asset ids that must be present; a missing one is fatal

        Raises:
            FatalConfigurationError: If a required asset is missing
        """
        config = config or get_config()
        self._store = store if store is not None else TemplateStore()
        self._store.require(required)

        self._env = Environment(
            trim_blocks=config.templates.trim_blocks,
            lstrip_blocks=config.templates.lstrip_blocks,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            autoescape=False,
        )
        self._setup_custom_filters()

        self._cache = TemplateCache(config.templates.cache_size)
        self._log = ScrivenerLogger(__name__)

    def _setup_custom_filters(self) -> None:
        """Set up custom Jinja2 filters for source generation."""

        def indent_filter(text: str, width: int = 4, first: bool = False) -> str:
            """Indent text by the specified width."""
            indented = indent_text(text, 1, " " * width)
            if first:
                return indented
            head, sep, _ = text.partition("\n")
            return head + sep + indented.partition("\n")[2] if sep else text

        def join_with_commas(items) -> str:
            """Join items with commas and proper spacing."""
            return ", ".join(str(item) for item in items)

        self._env.filters["indent"] = indent_filter
        self._env.filters["quote"] = quote_string
        self._env.filters["join_commas"] = join_with_commas

    @property
    def store(self) -> TemplateStore:
        return self._store

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    def compile(self, source: str, name: Optional[str] = None, helper_names: Iterable[str] = ()) -> Template:
        """
        Parse template source, reusing a cached parse when available.

        Args:
            source: Template source
            name: Name used in error messages
            helper_names: Helpers whose shorthand calls should be rewritten

        Returns:
            Parsed Jinja2 template

        Raises:
            TemplateParseError: If the source is not valid template syntax
        """
        name = name or "<template>"
        helpers_key = tuple(sorted(helper_names))
        key = (source, helpers_key)

        template = self._cache.get(key)
        if template is not None:
            self._log.log_cache_hit(name)
            return template

        self._log.log_cache_miss(name)
        try:
            template = self._env.from_string(rewrite_shorthand(source, helpers_key))
        except TemplateSyntaxError as e:
            raise TemplateParseError(f"Template parsing failed: {e.message}", name, e.lineno) from e

        self._cache.put(key, template)
        return template

    def render(
        self,
        source: str,
        binding: Any,
        helpers: Optional[Mapping[str, Callable]] = None,
        name: Optional[str] = None,
    ) -> str:
        """Render template source against a binding and return the text."""
        helpers = dict(helpers or {})
        template = self.compile(source, name, helpers.keys())

        context = binding_to_context(binding)
        context.update(helpers)
        try:
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(f"Template rendering failed: {e}", name or "<template>") from e
        except Exception as e:
            raise TemplateRenderError(
                f"Template helper failed: {type(e).__name__}: {e}", name or "<template>"
            ) from e

    def execute(
        self,
        source: str,
        binding: Any,
        sink,
        helpers: Optional[Mapping[str, Callable]] = None,
        name: Optional[str] = None,
    ) -> int:
        """
        Render template source and write the UTF-8 result into sink.

        Nothing is written when rendering fails.

        Returns:
            Number of bytes written
        """
        text = self.render(source, binding, helpers, name)
        return write_bytes(sink, text.encode("utf-8"))

    def execute_named(
        self,
        template_id: str,
        binding: Any,
        sink,
        helpers: Optional[Mapping[str, Callable]] = None,
    ) -> int:
        """
        Render a stored template asset into sink.

        Raises:
            TemplateNotFoundError: If the store has no asset with this id
        """
        source = self._store.get(template_id)
        if source is None:
            raise TemplateNotFoundError(template_id)
        return self.execute(source, binding, sink, helpers, template_id)


@dataclass(frozen=True)
class SourceText(Declaration):
    """
    Node rendering template source against a binding record.

    Uses the process-wide binder unless one is given.
    """
    template: str
    binding: Any = field(default=None, hash=False)
    helpers: Optional[Mapping[str, Callable]] = field(default=None, hash=False)
    binder: Optional[TemplateBinder] = field(default=None, compare=False, hash=False)

    def write_to(self, sink) -> int:
        binder = self.binder or get_template_binder()
        return binder.execute(self.template, self.binding, sink, self.helpers)


_global_binder: Optional[TemplateBinder] = None
_binder_lock = threading.Lock()


def get_template_binder() -> TemplateBinder:
    """
    Get the process-wide template binder.

    Built on first use from the global configuration and the default
    asset store; every structural template must be present.
    """
    global _global_binder
    with _binder_lock:
        if _global_binder is None:
            config = get_config()
            _global_binder = TemplateBinder(default_store(config), config, TemplateId.all())
        return _global_binder


def set_template_binder(binder: Optional[TemplateBinder]) -> None:
    """Set the process-wide binder; ``None`` rebuilds it lazily on next use."""
    global _global_binder
    with _binder_lock:
        _global_binder = binder
