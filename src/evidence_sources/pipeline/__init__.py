"""Pipeline module for evidence discovery."""

from evidence_sources.pipeline.base import Pipeline
from evidence_sources.pipeline.evidence import EvidencePipeline

__all__ = [
    "EvidencePipeline",
    "Pipeline",
]
