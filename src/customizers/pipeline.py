"""Runs the matching customizers of a registry against one build model."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List

from common.logging_utils import Timer, extra_context, is_debug_enabled

from .base import CustomizationContext
from .registry import CustomizerRegistry, Registration

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"


class CustomizerPipeline:
    """Filters, orders and invokes customizers for a single resolution.

    A pipeline instance runs once. Customizers share the build model
    sequentially; an exception raised by one of them aborts the run and
    propagates unchanged.
    """

    def __init__(self, registry: CustomizerRegistry):
        self.registry = registry
        self.state = PipelineState.PENDING
        self.applied: List[str] = []

    def select(self, description) -> List[Registration]:
        """Registrations whose activation matches, sorted by priority.

        ``sorted`` is stable, so equal priorities keep registration order.
        """
        active = [r for r in self.registry.registrations() if r.activation.matches(description)]
        return sorted(active, key=lambda r: r.priority)

    def run(self, context: CustomizationContext, build) -> None:
        if self.state is not PipelineState.PENDING:
            raise RuntimeError(f"pipeline already {self.state.value}")
        self.state = PipelineState.RUNNING
        selected = self.select(context.description)
        if is_debug_enabled(logger):
            logger.debug("Customizers selected", extra=extra_context(
                event="decision", component="pipeline", action="select",
                count=len(selected), target=",".join(r.name for r in selected)
            ))
        with Timer() as timer:
            for registration in selected:
                try:
                    customizer = registration.factory(context)
                    customizer.customize(build)
                except Exception:
                    logger.error("Customizer %s failed", registration.name, extra=extra_context(
                        event="error", component="pipeline", action="customize",
                        target=registration.name, outcome="failed"
                    ))
                    raise
                self.applied.append(registration.name)
        self.state = PipelineState.DONE
        if is_debug_enabled(logger):
            logger.debug("Pipeline done", extra=extra_context(
                event="function_exit", component="pipeline", action="run",
                count=len(self.applied), duration_ms=timer.duration_ms
            ))
