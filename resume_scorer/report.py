from __future__ import annotations

from resume_scorer.core.config.rules import RuleBook
from resume_scorer.schemas.analysis import AnalysisResult, ScoreLevel

_CATEGORY_NAMES = {
    "basic_info": "基本信息",
    "education": "教育背景",
    "skills": "专业技能",
    "experience": "实践经验",
    "achievements": "奖励荣誉",
}


def score_level(total_score: int, rulebook: RuleBook) -> ScoreLevel:
    levels = sorted(rulebook.value("score_levels", []), key=lambda level: int(level["min"]), reverse=True)
    for level in levels:
        if total_score >= int(level["min"]):
            return ScoreLevel(label=str(level["label"]), summary=str(level["summary"]))
    return ScoreLevel(label="待改进", summary="")


def _precision_label(confidence: float) -> str:
    if confidence > 0.8:
        return "高精度"
    if confidence > 0.6:
        return "中等精度"
    return "基础精度"


def render_report(result: AnalysisResult) -> str:
    """Render a plain-text report of one analysis."""
    extraction = result.extraction
    lines = ["简历分析报告", "==================", ""]

    lines += [
        "📊 总体评分",
        f"基础分: {result.base_score}/100分",
        f"专精加成: +{result.bonus_score}分",
        f"总分: {result.total_score}分",
        f"等级: {result.score_level.label}",
        f"评语: {result.score_level.summary}",
        "",
    ]

    if extraction.semantic_used:
        lines += [
            "🔍 关键词提取洞察",
            f"分析置信度: {round(extraction.overall_confidence * 100)}%",
            f"识别精度: {_precision_label(extraction.overall_confidence)}",
            f"提取条目: {extraction.total_facts} (去重 {extraction.duplicates_removed})",
            "",
        ]

    if result.specializations:
        lines.append("⭐ 专精领域识别")
        lines += [f"- {spec.description} (+{spec.bonus}分加成)" for spec in result.specializations]
        lines.append("")

    lines.append("📋 详细评分")
    for score in result.category_scores():
        name = _CATEGORY_NAMES[score.category]
        suffix = " (超分奖励)" if score.category == "education" and score.overscored else ""
        lines.append(f"- {name}: {score.capped_total}/{score.max_score}分{suffix}")
    lines.append("")

    lines.append("🎯 岗位推荐")
    for index, job in enumerate(result.job_recommendations, start=1):
        lines.append(f"{index}. {job.category} (匹配度: {job.match}%)")
        lines.append(f"   推荐理由: {job.reason}")
    lines.append("")

    lines.append("💡 改进建议")
    lines += [f"{index}. {text}" for index, text in enumerate(result.suggestions, start=1)]
    lines += ["", "---", "本报告由简历评分工具自动生成"]
    return "\n".join(lines) + "\n"
