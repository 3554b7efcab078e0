"""Reference panel configuration objects for genofilter runs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from genofilter.models import is_rsid

HEAD_LINE_COUNT = 50
MIN_SUCCESS_VARIANTS = 20
DEFAULT_TOP_CATEGORIES = 5
DEFAULT_PANEL = "neuropsych"


@dataclass(frozen=True)
class ReferenceCategory:
    """Named group of marker identifiers, kept in declaration order."""

    name: str
    marker_ids: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Category name cannot be empty")
        invalid = [marker for marker in self.marker_ids if not is_rsid(marker)]
        if invalid:
            raise ValueError(f"Category {self.name} has invalid marker ids: {', '.join(invalid)}")
        if len(set(self.marker_ids)) != len(self.marker_ids):
            raise ValueError(f"Category {self.name} lists a marker id more than once")

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").replace("-", " ")

    def __contains__(self, marker_id: object) -> bool:
        return marker_id in self.marker_ids


@dataclass(frozen=True)
class ReferencePanel:
    """Immutable set of categories that records are filtered against.

    Categories are not mutually exclusive: the same marker can appear in more
    than one category and is reported once per category.
    """

    name: str
    categories: tuple[ReferenceCategory, ...]
    description: str = ""
    _marker_ids: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = [category.name for category in self.categories]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate category names in panel {self.name}: {', '.join(duplicates)}")

        display_names = [category.display_name for category in self.categories]
        clashes = sorted({name for name in display_names if display_names.count(name) > 1})
        if clashes:
            raise ValueError(
                f"Categories in panel {self.name} share a display name: {', '.join(clashes)}"
            )

        marker_ids = frozenset(
            marker for category in self.categories for marker in category.marker_ids
        )
        object.__setattr__(self, "_marker_ids", marker_ids)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Sequence[str]],
        *,
        name: str = "custom",
        description: str = "",
    ) -> "ReferencePanel":
        """Build a panel from ``{category: [marker ids]}``.

        Repeated ids inside one category are collapsed, keeping the first one.
        """

        categories = tuple(
            ReferenceCategory(name=category, marker_ids=tuple(dict.fromkeys(markers)))
            for category, markers in mapping.items()
        )
        return cls(name=name, categories=categories, description=description)

    def marker_ids(self) -> frozenset[str]:
        """Union of marker ids across all categories."""

        return self._marker_ids

    @property
    def total_targets(self) -> int:
        return len(self._marker_ids)

    def __iter__(self) -> Iterator[ReferenceCategory]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)
