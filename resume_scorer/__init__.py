from .engine import ResumeAnalyzer, analyze
from .report import render_report
from .schemas import AnalysisOptions, AnalysisResult

__all__ = ["ResumeAnalyzer", "analyze", "render_report", "AnalysisOptions", "AnalysisResult"]
