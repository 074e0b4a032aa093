from __future__ import annotations

from docscore.schemas.report import Impact, Recommendation, RecommendationCategory

_CATEGORY_RANK: dict[str, int] = {"critical": 3, "warning": 2, "suggestion": 1, "success": 0}
_IMPACT_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


def recommendation_priority(category: RecommendationCategory, impact: Impact) -> int:
    return _CATEGORY_RANK[category] * 10 + _IMPACT_RANK[impact]


class RecommendationSet:
    """Collects findings for one scoring call.

    A title is only accepted once; ``ranked()`` orders by descending priority and
    keeps insertion order between equal priorities, so per-item findings stay in
    analyzer order.
    """

    def __init__(self) -> None:
        self._items: list[Recommendation] = []
        self._titles: set[str] = set()

    def __len__(self) -> int:
        return len(self._items)

    def add(self, category: RecommendationCategory, title: str, message: str, impact: Impact) -> bool:
        if title in self._titles:
            return False
        self._titles.add(title)
        self._items.append(
            Recommendation(
                category=category,
                title=title,
                message=message,
                impact=impact,
                priority=recommendation_priority(category, impact),
            )
        )
        return True

    def ranked(self) -> list[Recommendation]:
        return sorted(self._items, key=lambda item: item.priority, reverse=True)
