"""
Analysis Services

LLM-backed transcript analysis and validation of model output.
"""

from moodlog.services.analysis.analysis_engine import AnalysisEngine
from moodlog.services.analysis.response_validator import ResponseValidator

__all__ = [
    "AnalysisEngine",
    "ResponseValidator",
]
