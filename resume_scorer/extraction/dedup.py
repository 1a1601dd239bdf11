from __future__ import annotations

from resume_scorer.schemas.facts import CATEGORY_ORDER, AggregatedFact, CandidateFact


def text_similarity(left: str, right: str) -> float:
    """1.0 for equal text, 0.9 for containment, otherwise whitespace-token Jaccard."""
    if not left or not right:
        return 0.0
    a = left.lower().strip()
    b = right.lower().strip()
    if a == b:
        return 1.0
    if a in b or b in a:
        return 0.9
    tokens_a = set(a.split())
    tokens_b = set(b.split())
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


def deduplicate(
    facts: list[CandidateFact],
    *,
    threshold: float = 0.8,
    same_subcategory_threshold: float = 0.6,
) -> tuple[list[AggregatedFact], int]:
    """Collapse near-duplicate facts per category, keeping the most confident one.

    Returns the surviving facts grouped in category order and the number of
    candidates that were absorbed.
    """
    kept_by_category: dict[str, list[AggregatedFact]] = {category: [] for category in CATEGORY_ORDER}
    removed = 0

    for category in CATEGORY_ORDER:
        group = [fact for fact in facts if fact.category == category]
        # sorted() is stable, so ties keep discovery order.
        kept = kept_by_category[category]
        for fact in sorted(group, key=lambda item: item.confidence, reverse=True):
            duplicate_index = _find_duplicate(fact, kept, threshold, same_subcategory_threshold)
            if duplicate_index is None:
                kept.append(AggregatedFact(**fact.model_dump()))
                continue
            removed += 1
            survivor = kept[duplicate_index]
            kept[duplicate_index] = survivor.model_copy(update={"duplicates": survivor.duplicates + 1})

    aggregated = [fact for category in CATEGORY_ORDER for fact in kept_by_category[category]]
    return aggregated, removed


def _find_duplicate(
    fact: CandidateFact,
    kept: list[AggregatedFact],
    threshold: float,
    same_subcategory_threshold: float,
) -> int | None:
    for index, existing in enumerate(kept):
        similarity = text_similarity(fact.raw_text, existing.raw_text)
        if similarity > threshold:
            return index
        if fact.subcategory == existing.subcategory and similarity > same_subcategory_threshold:
            return index
    return None
