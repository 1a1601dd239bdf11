import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scorer.taxonomy import LocalSchoolRanks, clean_school_name  # noqa: E402


class SchoolRankTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.ranks = LocalSchoolRanks()

    def test_full_name_and_alias(self):
        self.assertEqual(self.ranks.rank("清华大学").score, 15)
        self.assertEqual(self.ranks.rank("清华").score, 15)

    def test_unknown_college_gets_generic_score(self):
        self.assertIn(self.ranks.rank("某不知名学院").score, {2, 3})

    def test_alias_does_not_shadow_other_full_names(self):
        self.assertEqual(self.ranks.rank("湖南大学").score, 9)
        self.assertEqual(self.ranks.rank("北京理工大学").score, 13)

    def test_leading_verbs_are_stripped(self):
        match = self.ranks.rank("毕业于深圳大学")
        self.assertEqual(match.name, "深圳大学")
        self.assertEqual(match.score, 5)
        self.assertEqual(clean_school_name("就读于南开大学。"), "南开大学")

    def test_vocational_and_prestige_markers(self):
        self.assertEqual(self.ranks.rank("某某职业技术学院").score, 1)
        self.assertEqual(self.ranks.rank("某985大学").score, 6)
        self.assertEqual(self.ranks.rank("").score, 2)

    def test_text_fallback(self):
        self.assertEqual(self.ranks.rank_text("本科毕业于一所211高校"), 9)
        self.assertEqual(self.ranks.rank_text("no school here"), 2)


if __name__ == "__main__":
    unittest.main()
