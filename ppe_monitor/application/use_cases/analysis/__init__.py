from .analyze_frame import AnalyzeFrameUseCase, FrameAnalysis

__all__ = ["AnalyzeFrameUseCase", "FrameAnalysis"]
