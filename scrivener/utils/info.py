"""
Package information utility.

This module provides a command-line utility for displaying
information about the Scrivener installation: version, configuration,
packaged template assets and registered annotations.
"""

import sys
import platform
from importlib.metadata import version
from typing import Dict, Any

import scrivener


def get_system_info() -> Dict[str, Any]:
    """
    Get system information relevant to Scrivener.

    Returns:
        Dictionary containing system information
    """
    return {
        'python_version': sys.version,
        'platform': platform.platform(),
        'jinja2_version': version("Jinja2"),
        'pyyaml_version': version("PyYAML"),
    }


def get_scrivener_info() -> Dict[str, Any]:
    """
    Get Scrivener-specific information.

    Returns:
        Dictionary containing Scrivener information
    """
    from scrivener.annotations import default_registry
    from scrivener.codegen.templates import default_store
    from scrivener.utils.config import get_config

    config = get_config()
    info = {
        'version': scrivener.__version__,
        'author': scrivener.__author__,
        'config_file': str(config.config_file),
        'template_dir': config.templates.template_dir or 'packaged',
    }

    try:
        info['templates'] = default_store(config).ids()
    except scrivener.ScrivenerError as e:
        info['template_error'] = str(e)

    registry = default_registry()
    info['annotations'] = {
        name: sorted(level.value for level in registry.variants(name))
        for name in registry.names()
    }

    return info


def print_info() -> None:
    """Print formatted information about Scrivener and the system."""
    print("Scrivener Code Synthesis Engine")
    print("=" * 40)

    scrivener_info = get_scrivener_info()
    print(f"\nScrivener Version: {scrivener_info['version']}")
    print(f"Author: {scrivener_info['author']}")
    print(f"Config File: {scrivener_info['config_file']}")
    print(f"Template Directory: {scrivener_info['template_dir']}")

    if 'templates' in scrivener_info:
        print(f"Template Assets: {len(scrivener_info['templates'])}")

    if 'template_error' in scrivener_info:
        print(f"Template Error: {scrivener_info['template_error']}")

    for name, levels in scrivener_info['annotations'].items():
        print(f"Annotation @{name}: {', '.join(levels)}")

    system_info = get_system_info()
    print(f"\nPython Version: {system_info['python_version'].split()[0]}")
    print(f"Platform: {system_info['platform']}")
    print(f"Jinja2 Version: {system_info['jinja2_version']}")
    print(f"PyYAML Version: {system_info['pyyaml_version']}")


def main() -> None:
    """Main entry point for the scrivener-info command."""
    try:
        print_info()
    except Exception as e:
        print(f"Error getting system information: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
