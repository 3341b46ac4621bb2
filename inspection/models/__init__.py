"""Model exports."""
from inspection.models.group import Group
from inspection.models.region import Region

__all__ = [
    "Group",
    "Region",
]
