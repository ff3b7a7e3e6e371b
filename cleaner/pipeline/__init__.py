from cleaner.pipeline.cleanup import CleanupPipeline, build_pipeline
from cleaner.pipeline.models import BatchResult, CleanupStage, JobOutcome

__all__ = ["BatchResult", "CleanupPipeline", "CleanupStage", "JobOutcome", "build_pipeline"]
