"""Combined overpass and scene analysis."""

from .analyzer import AnalysisReport, LandsatAnalyzer

__all__ = ["AnalysisReport", "LandsatAnalyzer"]
