"""Crop query evaluation against a region store."""
import logging
from typing import Iterable, List

from inspection.schemas.query import CropQuery, CropRegion
from inspection.schemas.region import RegionRecord, ResultRow
from inspection.services.region_store_base import GroupMember, RegionStore

logger = logging.getLogger("inspection.query")


def _sort_key(region: RegionRecord) -> tuple[float, float, int]:
    # y first, then x; id breaks ties between coincident points
    return (region.coord_y, region.coord_x, region.id)


def find_proper_groups(
    box: CropRegion,
    candidates: set[int],
    members: Iterable[GroupMember],
) -> set[int]:
    """
    Return the candidate groups whose every member lies inside the box.

    ``members`` must cover all stored regions, not only those that passed the
    category or group filters, otherwise a group with an excluded member
    outside the box would wrongly be reported as contained.
    """
    invalid: set[int] = set()
    for member in members:
        if member.group_id in candidates and member.group_id not in invalid:
            if not box.contains(member.coord_x, member.coord_y):
                invalid.add(member.group_id)
    return candidates - invalid


class QueryEngine:
    """Evaluates crop queries. Never writes to the store."""

    def __init__(self, store: RegionStore):
        self.store = store

    def evaluate(self, query: CropQuery) -> List[ResultRow]:
        """
        Run a crop query.

        1. Select regions inside the closed box, narrowed by category and
           group membership when given.
        2. Order by (y, x) ascending.
        3. With ``proper``, drop rows whose group has any stored member
           outside the box.

        Store errors propagate; no partial result is returned.
        """
        with self.store.snapshot():
            matches = self.store.scan_regions(query)
            matches.sort(key=_sort_key)
            logger.debug(f"Base scan matched {len(matches)} regions")

            if query.proper and matches:
                candidates = {region.group_id for region in matches}
                valid = find_proper_groups(
                    query.region, candidates, self.store.scan_all_regions()
                )
                logger.debug(
                    f"Proper containment: {len(valid)} of {len(candidates)} groups fully inside"
                )
                matches = [region for region in matches if region.group_id in valid]

        logger.info(f"Query returned {len(matches)} regions")
        return [
            ResultRow(
                x=region.coord_x,
                y=region.coord_y,
                category=region.category,
                group_id=region.group_id,
            )
            for region in matches
        ]


def evaluate(store: RegionStore, query: CropQuery) -> List[ResultRow]:
    """Evaluate a single query against ``store``."""
    return QueryEngine(store).evaluate(query)
