"""Selection state for the orders table.

A selection is either an explicit set of order ids or the "all" sentinel.
``AllSelected`` is never expanded into ids up front: it covers whatever is
accumulated at the moment it is resolved, including pages loaded later.
"""

from pydantic import BaseModel, ConfigDict


class ExplicitSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    ids: frozenset[str] = frozenset()


class AllSelected(BaseModel):
    model_config = ConfigDict(frozen=True)


Selection = ExplicitSelection | AllSelected


class UnknownOrderError(Exception):
    """Raised when selecting an order id that has not been loaded."""
