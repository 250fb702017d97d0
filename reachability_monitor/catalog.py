
# builds the immutable endpoint catalog from the plain dicts in config.ENDPOINTS

from collections.abc import Iterable, Sequence

from reachability_monitor.config import CATEGORY_ORDER
from reachability_monitor.models import EndpointDescriptor

_REQUIRED = ("id", "name", "url", "category")


def load_catalog(entries: Iterable[dict[str, str]]) -> tuple[EndpointDescriptor, ...]:
    """
    Convert config entries into EndpointDescriptors, keeping their order.

    URLs are not validated here: a malformed url is a per-endpoint probe
    failure (ERROR), not a reason to refuse to start.

    Raises:
        ValueError  on a missing required field or a duplicate id
    """
    catalog: list[EndpointDescriptor] = []
    seen: set[str] = set()

    for index, entry in enumerate(entries):
        missing = [key for key in _REQUIRED if not entry.get(key)]
        if missing:
            raise ValueError(f"endpoint #{index} is missing {', '.join(missing)}")
        if entry["id"] in seen:
            raise ValueError(f"duplicate endpoint id {entry['id']!r}")
        seen.add(entry["id"])

        catalog.append(EndpointDescriptor(
            id=entry["id"],
            display_name=entry["name"],
            url=entry["url"],
            category=entry["category"],
            icon_url=entry.get("icon_url") or None,
            description=entry.get("description") or None,
        ))

    return tuple(catalog)


def group_by_category(catalog: Sequence[EndpointDescriptor]) -> dict[str, list[EndpointDescriptor]]:
    """Group endpoints by category in display order; unknown categories go last."""
    groups: dict[str, list[EndpointDescriptor]] = {}
    for descriptor in catalog:
        groups.setdefault(descriptor.category, []).append(descriptor)

    def _rank(category: str) -> int:
        return CATEGORY_ORDER.index(category) if category in CATEGORY_ORDER else len(CATEGORY_ORDER)

    return {category: groups[category] for category in sorted(groups, key=_rank)}
