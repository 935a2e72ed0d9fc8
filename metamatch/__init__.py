"""MetaMatch: Figma style extraction and CSS generation.

Subpackages:
- extraction: Style normalization and tree flattening
- css: Declaration mapping and CSS file output
- integrations: Figma REST API client
- utils: Input validation
"""

__version__ = "0.1.0"
