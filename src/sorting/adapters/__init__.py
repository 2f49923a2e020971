"""Item adapters: how values are read off the items being sorted."""

from .objects import ObjectAdapter, read_member  # noqa: F401
from .soup import SoupAdapter  # noqa: F401

__all__ = ["ObjectAdapter", "SoupAdapter", "read_member"]
