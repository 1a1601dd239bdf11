import copy
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scorer.core.config.rules import build_rulebook, get_default_rulebook  # noqa: E402
from resume_scorer.core.config.scoring import get_scoring_config  # noqa: E402
from resume_scorer.schemas.analysis import CategoryScore  # noqa: E402
from resume_scorer.scoring import detect_specializations, score_achievements, score_experience, score_skills  # noqa: E402
from resume_scorer.scoring.specialization import overflow_specializations, skill_specializations  # noqa: E402

ACHIEVEMENTS = (
    "担任学生会主席。担任篮球社社长。获得国家奖学金。再次获得国家奖学金。"
    "获全国大学生数学建模竞赛一等奖。获全国电子设计竞赛二等奖。通过CPA考试。获得PMP认证。"
)


def _experience_score(overflow, counts):
    return CategoryScore(
        category="experience",
        raw_total=0.0,
        capped_total=0,
        max_score=30,
        overflow=overflow,
        evidence={"counts": counts},
    )


class SkillSpecializationTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.rulebook = get_default_rulebook()

    def test_programming_threshold_boundary(self):
        four = score_skills([], "熟悉Java、Python、React、Git", self.rulebook)
        self.assertEqual(four.itemized["programming"], 4)
        self.assertEqual(skill_specializations(four, self.rulebook), [])

        five = score_skills([], "熟悉Java、Python、React、Git、Docker", self.rulebook)
        found = skill_specializations(five, self.rulebook)
        self.assertEqual(len(found), 1)
        self.assertEqual((found[0].type, found[0].category, found[0].bonus), ("programming", "skill", 1))
        self.assertIn("5", found[0].description)

    def test_bonus_grows_with_count_up_to_cap(self):
        seven = score_skills([], "熟悉Java、Python、React、Git、Docker、Linux、Redis", self.rulebook)
        self.assertEqual(skill_specializations(seven, self.rulebook)[0].bonus, 3)


class OverflowSpecializationTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.rulebook = get_default_rulebook()

    def test_divisor_floors_overflow(self):
        self.assertEqual(overflow_specializations(_experience_score({"internship": 2.0}, {}), "experience", self.rulebook), [])
        found = overflow_specializations(
            _experience_score({"internship": 5.0}, {"internship": 5}), "experience", self.rulebook
        )
        self.assertEqual(len(found), 1)
        self.assertEqual((found[0].type, found[0].bonus, found[0].level), ("internship", 1, 5))
        self.assertIn("5", found[0].description)

    def test_bonus_is_capped(self):
        found = overflow_specializations(_experience_score({"project": 40.0}, {"project": 16}), "experience", self.rulebook)
        self.assertEqual(found[0].bonus, 5)

    def test_experience_overflow_from_text(self):
        text = "".join(f"在{name}科技有限公司实习。" for name in "甲乙丙丁戊")
        experience = score_experience([], text, self.rulebook)
        skills = score_skills([], "", self.rulebook)
        achievements = score_achievements([], "", self.rulebook)
        found = detect_specializations(skills, experience, achievements, self.rulebook)
        self.assertEqual([(s.type, s.category, s.bonus) for s in found], [("internship", "experience", 1)])


class AchievementClippingTests(unittest.TestCase):
    def test_per_item_clipping(self):
        rulebook = get_default_rulebook()
        score = score_achievements([], ACHIEVEMENTS, rulebook)
        self.assertEqual(score.evidence["clip_mode"], "per_item")
        self.assertEqual(score.raw_items, {"leadership": 6.0, "honor": 8.0, "competition": 6.0, "certificate": 4.0})
        self.assertEqual(score.itemized, {"leadership": 5, "honor": 5, "competition": 5, "certificate": 4})
        self.assertEqual(score.capped_total, 15)
        self.assertEqual(score.overflow, {"leadership": 1.0, "honor": 3.0, "competition": 1.0})

        found = overflow_specializations(score, "achievement", rulebook)
        self.assertEqual([(s.type, s.bonus) for s in found], [("honor", 1)])

    def test_shared_pool_clipping(self):
        config = copy.deepcopy(get_scoring_config())
        config["scoring"]["achievements"]["clip_mode"] = "shared_pool"
        rulebook = build_rulebook(config)

        score = score_achievements([], ACHIEVEMENTS, rulebook)
        self.assertEqual(score.itemized, {"leadership": 5, "honor": 5, "competition": 5, "certificate": 0})
        self.assertEqual(score.capped_total, 15)
        self.assertEqual(score.overflow["certificate"], 4.0)

        found = overflow_specializations(score, "achievement", rulebook)
        self.assertIn(("certificate", 1), [(s.type, s.bonus) for s in found])

    def test_every_subscore_respects_its_cap(self):
        score = score_achievements([], ACHIEVEMENTS * 3, get_default_rulebook())
        self.assertTrue(all(value <= 5 for value in score.itemized.values()))
        self.assertLessEqual(score.capped_total, 15)


if __name__ == "__main__":
    unittest.main()
