"""Coaching tip selection.

Tips are picked from the fixed banks in four passes, stopping at
``max_tips``: role tips, tips for the most frequent mistake categories,
tips for low-scoring categories, then the rest of the role tips.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from riftcoach.config.settings import AnalysisThresholds
from riftcoach.contracts.analysis import CoachingTip, FlaggedMistake, MistakeCategory, ScoreBreakdown
from riftcoach.contracts.common import Role
from riftcoach.core.data.tip_bank import CATEGORY_TIPS, ROLE_TIPS

logger = logging.getLogger(__name__)

# Tip bank consulted when a score category is low
_LOW_SCORE_TAGS = (
    ("resource", MistakeCategory.CS_MISSING),
    ("map_control", MistakeCategory.VISION),
    ("positioning", MistakeCategory.POSITIONING),
    ("objective", MistakeCategory.OBJECTIVE),
    ("trading", MistakeCategory.TRADING),
)


class _TipSelection:
    """Ordered, de-duplicated tip list with a hard cap."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.tips: list[CoachingTip] = []
        self._seen: set[str] = set()

    @property
    def full(self) -> bool:
        return len(self.tips) >= self.limit

    def offer(self, tips: Iterable[CoachingTip], related: Sequence[str] = (), cap: int | None = None) -> None:
        """Append unseen tips until the selection (or ``cap``) is full."""
        stop = self.limit if cap is None else min(cap, self.limit)
        for tip in tips:
            if len(self.tips) >= stop:
                return
            if tip.tip_id in self._seen:
                continue
            if related:
                tip = tip.model_copy(update={"related_mistake_ids": list(related)})
            self.tips.append(tip)
            self._seen.add(tip.tip_id)


def generate_coaching_tips(
    mistakes: Sequence[FlaggedMistake],
    scores: ScoreBreakdown,
    role: Role,
    thresholds: AnalysisThresholds,
) -> list[CoachingTip]:
    """Pick at most ``thresholds.max_tips`` tips, priorities renumbered from 1."""
    selection = _TipSelection(thresholds.max_tips)
    role_tips = ROLE_TIPS[role]

    selection.offer(role_tips, cap=thresholds.max_role_tips)

    # Counter keeps first-appearance order for equal counts
    counts = Counter(m.category for m in mistakes)
    ids_by_category: dict[MistakeCategory, list[str]] = {}
    for mistake in mistakes:
        if mistake.id is not None:
            ids_by_category.setdefault(mistake.category, []).append(mistake.id)

    for category, _ in counts.most_common():
        if selection.full:
            break
        related = ids_by_category.get(category, [])[: thresholds.max_related_mistakes]
        selection.offer(CATEGORY_TIPS.get(category, ()), related=related)

    low_scores = sorted(
        (
            (getattr(scores, field), tag)
            for field, tag in _LOW_SCORE_TAGS
            if getattr(scores, field) < thresholds.low_score_threshold
        ),
        key=lambda pair: pair[0],
    )
    for _, tag in low_scores:
        if selection.full:
            break
        selection.offer(CATEGORY_TIPS[tag])

    if role is not Role.UNKNOWN:
        selection.offer(role_tips)

    logger.debug(f"Selected {len(selection.tips)} coaching tips for role {role.value}")
    return [
        tip.model_copy(update={"priority": index})
        for index, tip in enumerate(selection.tips, start=1)
    ]
