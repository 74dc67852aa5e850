"""A11y Docs Service: search and fetch web accessibility documentation.

This package ranks articles from a remote, flatly-indexed markdown
collection (W3C WAI-ARIA patterns and accessibility guidance) by:
- Title and path similarity
- Optional full-body content matching with context snippets

Articles are fetched lazily and kept in a shared content cache.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
