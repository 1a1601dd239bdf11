import sys
import time
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_scorer import AnalysisOptions, ResumeAnalyzer, analyze, render_report  # noqa: E402
from resume_scorer.extraction import EntitySpans  # noqa: E402

RESUME = (
    "姓名：张三 电话：13800138000 邮箱：a@b.com 毕业于清华大学，本科，GPA 3.8。"
    "掌握Java、Python、React、Node.js、Git。在腾讯实习。获得国家奖学金。"
)


class PersonClassifier:
    def is_available(self):
        return True

    def classify_entities(self, sentence):
        if "张三" in sentence:
            return EntitySpans(people=("张三",))
        return EntitySpans()


class EngineTests(unittest.TestCase):
    def test_end_to_end_scenario(self):
        result = analyze(RESUME)

        self.assertGreaterEqual(result.basic_info.capped_total, 6)
        self.assertEqual(result.education.itemized["school"], 15)
        self.assertEqual(result.education.itemized["academic"], 5)
        self.assertEqual(result.education.itemized["degree"], 1)
        self.assertGreaterEqual(result.skills.itemized["programming"], 4)
        self.assertGreater(result.experience.itemized["internship"], 0)
        self.assertGreater(result.achievements.itemized["honor"], 0)

        self.assertEqual(
            result.base_score,
            sum(score.capped_total for score in result.category_scores()),
        )
        self.assertEqual(result.total_score, result.base_score + result.bonus_score)
        self.assertGreaterEqual(result.total_score, 38)
        self.assertIn("programming", [spec.type for spec in result.specializations])
        self.assertEqual(result.job_recommendations[0].category, "软件开发工程师")

    def test_analysis_is_idempotent(self):
        self.assertEqual(analyze(RESUME).to_payload(), analyze(RESUME).to_payload())

    def test_adding_an_internship_is_monotonic(self):
        before = analyze(RESUME)
        after = analyze(RESUME + "2019年在字节跳动科技有限公司实习。")
        self.assertGreater(after.experience.itemized["internship"], before.experience.itemized["internship"])
        self.assertGreaterEqual(after.total_score, before.total_score)

    def test_category_caps_hold(self):
        text = RESUME * 5 + "".join(f"担任{role}。" for role in ("学生会主席", "社团社长", "班长", "部长"))
        result = analyze(text)
        self.assertLessEqual(result.basic_info.capped_total, 10)
        self.assertLessEqual(result.skills.capped_total, 20)
        self.assertLessEqual(result.achievements.capped_total, 15)
        self.assertTrue(all(value <= 5 for value in result.achievements.itemized.values()))
        self.assertTrue(all(value <= 10 for value in result.experience.itemized.values()))

    def test_empty_and_sparse_input_do_not_raise(self):
        for text in ("", "   ", "你好"):
            result = analyze(text)
            self.assertGreaterEqual(result.total_score, 0)
            self.assertEqual(result.score_level.label, "待改进")
            self.assertTrue(result.suggestions)
            self.assertTrue(result.job_recommendations)

    def test_payload_shape(self):
        payload = analyze(RESUME).to_payload()
        for key in ("baseScore", "specializationBonus", "totalScore", "categoryScores",
                    "specializations", "suggestions", "jobRecommendations", "scoreLevel"):
            self.assertIn(key, payload)
        self.assertEqual(
            set(payload["categoryScores"]),
            {"basicInfo", "education", "skills", "experience", "achievements"},
        )
        self.assertEqual(set(payload["categoryScores"]["skills"]), {"total", "details", "extraScore"})
        for category in payload["categoryScores"].values():
            self.assertIsInstance(category["extraScore"], dict)
            self.assertTrue(all(isinstance(v, int) for v in category["extraScore"].values()))

    def test_extra_score_is_reported_per_subscore(self):
        text = "".join(f"在{name}科技有限公司实习。" for name in "甲乙丙丁戊")
        payload = analyze(text).to_payload()
        self.assertEqual(payload["categoryScores"]["experience"]["extraScore"], {"internship": 5})
        self.assertEqual(payload["categoryScores"]["basicInfo"]["extraScore"], {})

    def test_long_single_line_input_stays_fast(self):
        chunk = "2020-2021 worked on backend services at Acme Corp using Java and Python; "
        text = chunk * 200
        started = time.perf_counter()
        result = analyze(text)
        elapsed = time.perf_counter() - started
        self.assertGreaterEqual(result.total_score, 0)
        self.assertLess(elapsed, 10.0)

    def test_extraction_summary(self):
        summary = analyze(RESUME).extraction
        self.assertGreater(summary.total_facts, 0)
        self.assertLessEqual(summary.high_confidence_facts, summary.total_facts)
        self.assertGreater(summary.coverage_score, 0.0)
        self.assertLessEqual(summary.overall_confidence, 1.0)
        self.assertFalse(summary.semantic_used)

    def test_options_control_the_classifier(self):
        analyzer = ResumeAnalyzer(PersonClassifier())
        self.assertTrue(analyzer.analyze(RESUME).extraction.semantic_used)
        disabled = analyzer.analyze(RESUME, AnalysisOptions(use_semantic_classifier=False))
        self.assertFalse(disabled.extraction.semantic_used)

    def test_report_sections(self):
        result = analyze(RESUME)
        report = render_report(result)
        self.assertIn("📊 总体评分", report)
        self.assertIn(f"总分: {result.total_score}分", report)
        self.assertIn("⭐ 专精领域识别", report)
        self.assertIn("🎯 岗位推荐", report)
        self.assertNotIn("🔍", report)

        semantic = ResumeAnalyzer(PersonClassifier()).analyze(RESUME)
        self.assertIn("🔍 关键词提取洞察", render_report(semantic))


if __name__ == "__main__":
    unittest.main()
