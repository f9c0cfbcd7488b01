"""hqlgen formatter module - HQL source re-formatting."""

from hqlgen.formatter.formatter import (
    capitalize_keywords,
    format_hql,
    split_top_level,
)

__all__ = [
    "capitalize_keywords",
    "format_hql",
    "split_top_level",
]
