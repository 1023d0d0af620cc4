"""Building blocks for a Jinja-style text template engine: context, AST, whitespace control, loop state and filter helpers."""

__version__ = "0.1.0"
__all__ = ["ast", "context", "errors", "filter_utils", "for_loop", "whitespace"]