"""
Private Jinja2 Template Loader for ZIGROUTE CLI

All CLI output templates are loaded through this environment.

IMPORTANT: This is a private module (prefixed with underscore) and should
only be imported internally by ZIGROUTE CLI commands.
"""

from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

TEMPLATES_DIR = Path(__file__).parent / "templates"

# Plain-text output: escape only HTML templates
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
    auto_reload=False,
    undefined=StrictUndefined,  # Fail loudly on undefined variables
    trim_blocks=True,
    lstrip_blocks=True
)

__all__ = ['jinja_env', 'TEMPLATES_DIR']
