"""Aggregate lookups that fail with a readable not-found message."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain


def load(aggregate_cls, identifier):
    """Fetch ``aggregate_cls`` by id or raise ``ObjectNotFoundError("<Name> not found")``."""
    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise ObjectNotFoundError(f"{aggregate_cls.__name__} not found") from None
