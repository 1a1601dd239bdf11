import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scorer.core.config.rules import get_default_rulebook  # noqa: E402
from resume_scorer.scoring import (  # noqa: E402
    score_basic_info,
    score_education,
    score_experience,
    score_skills,
)
from resume_scorer.scoring.education import find_degrees, normalize_gpa, parse_gpa  # noqa: E402


class BasicInfoScorerTests(unittest.TestCase):
    def test_items_are_capped_at_category_max(self):
        text = (
            "姓名:李四\n电话:13912345678\n邮箱:li@example.com\n地址:上海市浦东新区\n"
            "github.com/lisi\nLinkedIn: lisi\n出生:1998年05月\n政治面貌:党员"
        )
        score = score_basic_info([], text, get_default_rulebook())
        self.assertEqual(score.raw_total, 16)
        self.assertEqual(score.capped_total, 10)
        self.assertTrue(all(value == 2 for value in score.itemized.values()))

    def test_empty_text_scores_zero(self):
        score = score_basic_info([], "", get_default_rulebook())
        self.assertEqual(score.capped_total, 0)


class EducationScorerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.rulebook = get_default_rulebook()

    def test_multi_degree_averages_first_and_highest_school(self):
        text = "2014-2018 深圳大学 本科\n2018-2021 清华大学 硕士"
        degrees = find_degrees(text)
        self.assertEqual([(d.level, d.school) for d in degrees], [("bachelor", "深圳大学"), ("master", "清华大学")])

        score = score_education([], text, self.rulebook)
        self.assertEqual(score.itemized["school"], 10)
        self.assertEqual(score.itemized["degree"], 4)
        self.assertEqual(score.evidence["basis"], "multi_degree")

    def test_single_degree_uses_its_school(self):
        score = score_education([], "毕业于清华大学，本科，GPA 3.8", self.rulebook)
        self.assertEqual(score.itemized, {"school": 15, "academic": 5, "degree": 1})
        self.assertEqual(score.capped_total, 21)

    def test_gpa_scales_are_normalized(self):
        self.assertAlmostEqual(normalize_gpa(92), 3.68)
        self.assertAlmostEqual(normalize_gpa(4.5), 3.6)
        self.assertEqual(normalize_gpa(3.5), 3.5)
        self.assertEqual(parse_gpa("绩点: 3.0", []), 3.0)
        self.assertEqual(score_education([], "某大学 本科 GPA 92", self.rulebook).itemized["academic"], 4)
        self.assertEqual(score_education([], "某大学 本科 绩点:3.0", self.rulebook).itemized["academic"], 3)

    def test_grade_mention_without_number_scores_one(self):
        score = score_education([], "某大学 本科 成绩优秀", self.rulebook)
        self.assertEqual(score.itemized["academic"], 1)

    def test_no_education_text_does_not_raise(self):
        score = score_education([], "", self.rulebook)
        self.assertEqual(score.itemized["degree"], 0)
        self.assertEqual(score.itemized["academic"], 0)


class SkillsScorerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.rulebook = get_default_rulebook()

    def test_bucket_is_capped_and_overflow_recorded(self):
        score = score_skills([], "熟悉Java、Python、React、Git、Docker、Linux、Redis", self.rulebook)
        self.assertEqual(score.raw_items["programming"], 7.0)
        self.assertEqual(score.itemized["programming"], 5)
        self.assertEqual(score.overflow["programming"], 2.0)

    def test_go_does_not_match_inside_words(self):
        score = score_skills([], "在Google使用Java", self.rulebook)
        self.assertEqual(score.evidence["matched"]["programming"], ["Java"])

    def test_category_cap(self):
        text = (
            "Java Python Go Rust Swift\n"
            "Photoshop Illustrator Sketch Figma\n"
            "Tableau SPSS Spark Hadoop\n"
            "ANSYS ABAQUS COMSOL\n"
            "英语 日语 法语\n"
            "运营 销售\n"
            "钢琴 吉他 舞蹈"
        )
        score = score_skills([], text, self.rulebook)
        self.assertGreaterEqual(score.raw_total, 20)
        self.assertEqual(score.capped_total, 20)
        for bucket in self.rulebook.skill_buckets:
            self.assertLessEqual(score.itemized[bucket.name], bucket.cap)


class ExperienceScorerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.rulebook = get_default_rulebook()

    def test_internships_are_capped_per_subscore(self):
        text = "".join(f"在{name}科技有限公司实习。" for name in "甲乙丙丁戊")
        score = score_experience([], text, self.rulebook)
        self.assertEqual(score.evidence["counts"]["internship"], 5)
        self.assertEqual(score.raw_items["internship"], 15.0)
        self.assertEqual(score.itemized["internship"], 10)
        self.assertEqual(score.overflow, {"internship": 5.0})
        self.assertLessEqual(score.capped_total, 30)

    def test_publication_venues(self):
        score = score_experience([], "在Nature期刊发表论文一篇，另有SCI论文, EI论文各一篇。", self.rulebook)
        self.assertEqual(score.evidence["venues"]["nature_science"], 1)
        self.assertEqual(score.evidence["counts"]["academic"], 3)
        self.assertEqual(score.itemized["academic"], 10)

    def test_intern_inside_other_words_is_ignored(self):
        score = score_experience([], "Built internal tools for the International team", self.rulebook)
        self.assertEqual(score.itemized["internship"], 0)

    def test_adding_an_internship_never_lowers_the_score(self):
        before = score_experience([], "在腾讯实习。", self.rulebook)
        after = score_experience([], "在腾讯实习。2019年在字节跳动科技有限公司实习。", self.rulebook)
        self.assertGreater(after.itemized["internship"], before.itemized["internship"])


if __name__ == "__main__":
    unittest.main()
