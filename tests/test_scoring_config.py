import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scorer.core.config.rules import get_default_rulebook, keyword_pattern  # noqa: E402
from resume_scorer.core.config.scoring import (  # noqa: E402
    get_scoring_config,
    get_scoring_value,
    load_scoring_config,
)


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(config["version"], "2024.1")
        self.assertEqual(get_scoring_value("specialization.divisor"), 3)
        self.assertEqual(get_scoring_value("scoring.category_max.experience"), 30)
        self.assertEqual(get_scoring_value("scoring.missing.key", "fallback"), "fallback")

    def test_loader_rejects_incomplete_tables(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "scoring.yaml"
            path.write_text("version: '1'\nextraction: {}\n", encoding="utf-8")
            with self.assertRaises(RuntimeError):
                load_scoring_config(path)

    def test_loader_rejects_missing_file(self):
        with self.assertRaises(RuntimeError):
            load_scoring_config(Path("/nonexistent/scoring.yaml"))

    def test_rulebook_compiles_buckets_and_subcategories(self):
        rulebook = get_default_rulebook()
        self.assertEqual(rulebook.version, "2024.1")
        self.assertEqual(
            [bucket.name for bucket in rulebook.skill_buckets],
            ["programming", "design", "data", "engineering", "languages", "business", "arts"],
        )
        programming = rulebook.bucket("programming")
        self.assertIsNotNone(programming)
        self.assertEqual((programming.cap, programming.threshold), (5, 5))
        pairs = {(rule.category, rule.subcategory) for rule in rulebook.subcategories}
        self.assertIn(("personal", "email"), pairs)
        self.assertIn(("achievements", "leadership"), pairs)

    def test_keyword_pattern_uses_ascii_boundaries(self):
        go = keyword_pattern("Go")
        self.assertIsNone(go.search("Google"))
        self.assertIsNotNone(go.search("熟悉Go语言"))
        self.assertIsNotNone(keyword_pattern("Node.js").search("nodejs"))
        self.assertIsNotNone(keyword_pattern("C++").search("精通C++开发"))


if __name__ == "__main__":
    unittest.main()
