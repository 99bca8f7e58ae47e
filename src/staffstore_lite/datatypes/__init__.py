"""Generic containers used by the record store."""
from staffstore_lite.datatypes.ordered_map import OrderedMap

__all__ = ["OrderedMap"]
