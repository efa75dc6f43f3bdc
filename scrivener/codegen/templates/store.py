"""
Template Asset Store.

Holds the template sources the structural node library renders with,
keyed by asset id (the file name, e.g. ``function.j2``). The store is
read-only once built. The ``must`` accessors raise
``FatalConfigurationError`` and are meant for start-up validation only;
renders use ``get`` and treat a missing asset as a recoverable error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from ...utils.config import ScrivenerConfig, get_config
from ...utils.constants import TEMPLATE_EXTENSION
from ...utils.exceptions import FatalConfigurationError
from ...utils.logging import get_logger

logger = get_logger(__name__)

PACKAGED_TEMPLATE_DIR = Path(__file__).parent / "go"


class TemplateStore:
    """Read-only mapping of template ids to template source text."""

    def __init__(self, assets: Optional[Mapping[str, str]] = None):
        self._assets: Dict[str, str] = dict(assets or {})

    @classmethod
    def from_directory(cls, path) -> "TemplateStore":
        """
        Load every template asset in a directory.

        Args:
            path: Directory containing ``*.j2`` files

        Returns:
            Store keyed by file name

        Raises:
            FatalConfigurationError: If the directory does not exist or a file cannot be read
        """
        directory = Path(path)
        if not directory.is_dir():
            raise FatalConfigurationError(f"Template directory not found: {directory}")

        assets = {}
        for template_path in sorted(directory.glob(f"*{TEMPLATE_EXTENSION}")):
            try:
                assets[template_path.name] = template_path.read_text(encoding="utf-8")
            except OSError as e:
                raise FatalConfigurationError(
                    f"Failed to read template asset {template_path}: {e}", template_path.name
                ) from e

        logger.debug(f"Loaded {len(assets)} template assets from {directory}")
        return cls(assets)

    def get(self, template_id: str) -> Optional[str]:
        """Return the template source for an id, or None when absent."""
        return self._assets.get(template_id)

    def must_get(self, template_id: str) -> str:
        """Return the template source for an id; absence is fatal."""
        source = self._assets.get(template_id)
        if source is None:
            raise FatalConfigurationError(
                f"Required template asset '{template_id}' is missing", template_id
            )
        return source

    def require(self, template_ids: Iterable[str]) -> None:
        """Check that every id is present; the first missing one is fatal."""
        for template_id in template_ids:
            self.must_get(template_id)

    def merged(self, other: "TemplateStore") -> "TemplateStore":
        """Return a new store where assets in other replace assets here."""
        assets = dict(self._assets)
        assets.update(other._assets)
        return TemplateStore(assets)

    def ids(self) -> List[str]:
        return sorted(self._assets)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._assets

    def __len__(self) -> int:
        return len(self._assets)


def default_store(config: Optional[ScrivenerConfig] = None) -> TemplateStore:
    """
    Build the default template store.

    The packaged Go-dialect assets form the base; a configured template
    directory (``templates.template_dir`` or ``SCRIVENER_TEMPLATE_DIR``)
    overrides individual assets by id.

    Args:
        config: Configuration to read; defaults to the global one

    Returns:
        The assembled store
    """
    config = config or get_config()
    store = TemplateStore.from_directory(PACKAGED_TEMPLATE_DIR)

    override_dir = config.templates.template_dir
    if override_dir:
        logger.info(f"Overriding packaged templates from {override_dir}")
        store = store.merged(TemplateStore.from_directory(override_dir))

    return store
