"""Technology trend engine: scores, momentum and anomalies from popularity signals."""

from trend_engine.pipeline import PipelineResult, run_scoring_pipeline

__all__ = ["PipelineResult", "run_scoring_pipeline"]
