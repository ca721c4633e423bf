"""Anchor points and body templates.

A :class:`BodyTemplate` groups :class:`AnchorPoint` entries by body region.
Each anchor names the slot a part attaches to; parts are centered on their
anchor during assembly.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Tuple

from pyrsistent import PMap, pmap

from pixel_forge.types import BodyRegion, BodyStyle, Slot


@dataclass(frozen=True)
class AnchorPoint:
    """Attachment point.

    Attributes:
        x: Column of the anchor centre.
        y: Row of the anchor centre.
        slot: Slot served by this anchor.
    """

    x: int
    y: int
    slot: Slot


@dataclass(frozen=True)
class BodyTemplate:
    """Canonical body silhouette with its attachment anchors.

    Attributes:
        id: Template identifier.
        width: Canvas width the anchors refer to.
        height: Canvas height the anchors refer to.
        style: Body proportions family.
        anchors: Anchors grouped by body region.
    """

    id: str
    width: int
    height: int
    style: BodyStyle
    anchors: PMap[BodyRegion, Tuple[AnchorPoint, ...]] = pmap()

    def all_anchors(self) -> Iterator[AnchorPoint]:
        """Iterate anchors region by region in ``BodyRegion`` order."""
        for region in BodyRegion:
            yield from self.anchors.get(region, ())

    def find_anchor(self, slot: Slot) -> Optional[AnchorPoint]:
        """First anchor serving ``slot`` or ``None``."""
        for anchor in self.all_anchors():
            if anchor.slot == slot:
                return anchor
        return None


def make_anchors(
    groups: Mapping[BodyRegion, "list[AnchorPoint] | Tuple[AnchorPoint, ...]"],
) -> PMap[BodyRegion, Tuple[AnchorPoint, ...]]:
    return pmap({region: tuple(points) for region, points in groups.items()})
