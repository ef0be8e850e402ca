"""Conditionally activated build customizers and the pipeline that runs them."""

from .base import ALWAYS, Activation, BuildCustomizer, CustomizationContext
from .registry import CustomizerRegistry, Registration, default_registry
from .pipeline import CustomizerPipeline, PipelineState

__all__ = [
    "ALWAYS",
    "Activation",
    "BuildCustomizer",
    "CustomizationContext",
    "CustomizerRegistry",
    "Registration",
    "default_registry",
    "CustomizerPipeline",
    "PipelineState",
]
