"""
Workflows module - request pipelines for the feed and breaking endpoints.
"""
from workflows.base import Pipeline
from workflows.breaking import BreakingPipeline
from workflows.feed import FeedPipeline

__all__ = [
    "Pipeline",
    "BreakingPipeline",
    "FeedPipeline",
]
