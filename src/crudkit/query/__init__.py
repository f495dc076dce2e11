"""SQL text builders."""

from crudkit.query.fluent import FluentQuery

__all__ = ["FluentQuery"]
