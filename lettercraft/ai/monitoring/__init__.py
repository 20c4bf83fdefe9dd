"""
Monitoring Module - logging and metrics for letter generations.

Usage:
    from lettercraft.ai.monitoring import ai_monitor

    ai_monitor.start(request_id, letter_type, prompt, model)
    ai_monitor.finish(request_id, response)

    stats = ai_monitor.get_stats()
"""

from lettercraft.ai.monitoring.monitor import (
    AIMonitor,
    GenerationRecord,
    UsageStats,
    ai_monitor,
)

__all__ = [
    "AIMonitor",
    "GenerationRecord",
    "UsageStats",
    "ai_monitor",
]
