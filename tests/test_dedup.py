import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scorer.extraction import deduplicate, text_similarity  # noqa: E402
from resume_scorer.schemas.facts import CandidateFact  # noqa: E402


def _fact(category, subcategory, text, confidence, position=0):
    return CandidateFact(
        category=category,
        subcategory=subcategory,
        raw_text=text,
        confidence=confidence,
        method="exact_pattern",
        source_position=position,
        source_span=text,
    )


class TextSimilarityTests(unittest.TestCase):
    def test_similarity_scale(self):
        self.assertEqual(text_similarity("Python", "python "), 1.0)
        self.assertEqual(text_similarity("清华大学", "毕业于清华大学"), 0.9)
        self.assertEqual(text_similarity("python java go", "python java rust"), 0.5)
        self.assertEqual(text_similarity("", "x"), 0.0)


class DeduplicateTests(unittest.TestCase):
    def test_most_confident_fact_survives(self):
        facts = [
            _fact("education", "school", "毕业于清华大学", 0.6),
            _fact("education", "school", "清华大学", 0.9),
        ]
        kept, removed = deduplicate(facts)
        self.assertEqual(removed, 1)
        self.assertEqual(len(kept), 1)
        self.assertEqual(kept[0].raw_text, "清华大学")
        self.assertEqual(kept[0].duplicates, 1)

    def test_categories_are_deduplicated_separately(self):
        facts = [
            _fact("skills", "programming", "Python", 0.8),
            _fact("experience", "project", "Python", 0.8),
        ]
        kept, removed = deduplicate(facts)
        self.assertEqual(removed, 0)
        self.assertEqual([f.category for f in kept], ["skills", "experience"])

    def test_loose_threshold_only_applies_within_a_subcategory(self):
        facts = [
            _fact("skills", "programming", "python java go", 0.8),
            _fact("skills", "programming", "go java python rust", 0.7),
            _fact("skills", "design", "figma java python go", 0.6),
        ]
        kept, removed = deduplicate(facts)
        # 3/4 token overlap: merged inside "programming", kept under "design".
        self.assertEqual(removed, 1)
        self.assertEqual([f.subcategory for f in kept], ["programming", "design"])

    def test_ties_keep_discovery_order(self):
        facts = [
            _fact("personal", "name", "张三", 0.7, position=3),
            _fact("personal", "name", "张三", 0.7, position=40),
        ]
        kept, _ = deduplicate(facts)
        self.assertEqual(kept[0].source_position, 3)

    def test_output_follows_category_order(self):
        facts = [
            _fact("achievements", "honor", "三好学生", 0.9),
            _fact("personal", "email", "a@b.com", 0.5),
        ]
        kept, _ = deduplicate(facts)
        self.assertEqual([f.category for f in kept], ["personal", "achievements"])


if __name__ == "__main__":
    unittest.main()
