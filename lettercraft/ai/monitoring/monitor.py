"""
AI Monitor - structured logs and running totals for letter generations.

Each generation is logged twice as a JSON event (`letter_request` when the
prompt is sent, `letter_response` when the model answers) and folded into
an in-memory UsageStats snapshot served by GET /api/stats.

Usage:
    from lettercraft.ai.monitoring import ai_monitor

    ai_monitor.start(request_id, letter_type="cover-letter", prompt=prompt,
                     model="gemini-2.5-flash")
    response = await provider.generate_parts([...])
    ai_monitor.finish(request_id, response)
"""

import json
import logging
import sys
from collections import deque
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from threading import Lock
from typing import Deque, Dict, List, Optional, Tuple

from lettercraft.ai.providers.base import AIResponse


# ---------------------------------------------------------------------------
# LOGGING SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("lettercraft.ai.monitor")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(handler)
    logger.propagate = False


# USD per 1M tokens as (input, output); unknown models are not priced
PRICE_PER_1M_TOKENS: Dict[str, Tuple[float, float]] = {
    "gemini-2.5-flash": (0.30, 2.50),
    "gemini-2.5-flash-lite": (0.10, 0.40),
    "gemini-2.5-pro": (1.25, 10.00),
}

PREVIEW_CHARS = 100


def estimate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    input_price, output_price = PRICE_PER_1M_TOKENS.get(model, (0.0, 0.0))
    return (prompt_tokens * input_price + completion_tokens * output_price) / 1_000_000


@dataclass
class GenerationRecord:
    """Outcome of one generate-letter call."""
    request_id: str
    letter_type: str
    model: str
    prompt_tokens: int
    completion_tokens: int
    latency_ms: float
    success: bool
    status_code: Optional[int] = None
    estimated_cost: float = 0.0
    finished_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass
class UsageStats:
    """Running totals since process start (or the last reset)."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_tokens: int = 0
    total_latency_ms: float = 0.0
    estimated_total_cost: float = 0.0
    requests_by_letter_type: Dict[str, int] = field(default_factory=dict)
    failures_by_status: Dict[str, int] = field(default_factory=dict)

    @property
    def avg_latency_ms(self) -> float:
        return self.total_latency_ms / self.total_requests if self.total_requests else 0.0

    @property
    def success_rate(self) -> float:
        if not self.total_requests:
            return 0.0
        return self.successful_requests * 100 / self.total_requests

    def add(self, record: GenerationRecord) -> None:
        self.total_requests += 1
        if record.success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1
            # Transport failures have no upstream status
            status = str(record.status_code) if record.status_code is not None else "transport"
            self.failures_by_status[status] = self.failures_by_status.get(status, 0) + 1

        self.total_tokens += record.total_tokens
        self.total_latency_ms += record.latency_ms
        self.estimated_total_cost += record.estimated_cost
        self.requests_by_letter_type[record.letter_type] = \
            self.requests_by_letter_type.get(record.letter_type, 0) + 1

    def snapshot(self) -> "UsageStats":
        return replace(
            self,
            requests_by_letter_type=dict(self.requests_by_letter_type),
            failures_by_status=dict(self.failures_by_status),
        )

    def to_dict(self) -> Dict:
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": f"{self.success_rate:.1f}%",
            "total_tokens": self.total_tokens,
            "avg_latency_ms": round(self.avg_latency_ms, 2),
            "estimated_total_cost": f"${self.estimated_total_cost:.4f}",
            "requests_by_letter_type": dict(self.requests_by_letter_type),
            "failures_by_status": dict(self.failures_by_status),
        }


class AIMonitor:
    """
    Thread-safe log and metrics sink for the letter gateway.

    Keeps the last `max_history` GenerationRecords for inspection.
    """

    def __init__(self, max_history: int = 1000):
        self._lock = Lock()
        self._pending: Dict[str, str] = {}
        self._recent: Deque[GenerationRecord] = deque(maxlen=max_history)
        self._stats = UsageStats()

    def start(self, request_id: str, letter_type: str, prompt: str, model: str) -> None:
        """Log an outgoing prompt and remember which letter type it is for."""
        with self._lock:
            self._pending[request_id] = letter_type

        preview = prompt if len(prompt) <= PREVIEW_CHARS else prompt[:PREVIEW_CHARS] + "..."
        self._log(logging.INFO, {
            "event": "letter_request",
            "request_id": request_id,
            "letter_type": letter_type,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": preview,
        })

    def finish(self, request_id: str, response: AIResponse) -> GenerationRecord:
        """Fold a provider response into the totals and log it."""
        usage = response.usage
        with self._lock:
            letter_type = self._pending.pop(request_id, "unknown")
            record = GenerationRecord(
                request_id=request_id,
                letter_type=letter_type,
                model=response.model,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                latency_ms=response.latency_ms,
                success=response.success,
                status_code=response.status_code,
                estimated_cost=estimate_cost(
                    response.model, usage.prompt_tokens, usage.completion_tokens
                ),
            )
            self._recent.append(record)
            self._stats.add(record)

        event = {
            "event": "letter_response",
            "request_id": request_id,
            "letter_type": letter_type,
            "success": record.success,
            "latency_ms": round(record.latency_ms, 2),
            "tokens": {"prompt": record.prompt_tokens, "completion": record.completion_tokens},
            "estimated_cost": f"${record.estimated_cost:.6f}",
            "response_length": len(response.content or ""),
        }
        if not response.success:
            event["error"] = response.error
            event["status_code"] = response.status_code
        self._log(logging.INFO if response.success else logging.WARNING, event)
        return record

    def get_stats(self) -> UsageStats:
        """Copy of the totals, safe to read while requests keep arriving."""
        with self._lock:
            return self._stats.snapshot()

    def get_recent(self, limit: int = 10) -> List[GenerationRecord]:
        """Most recent records, newest first."""
        with self._lock:
            return list(self._recent)[::-1][:limit]

    def reset(self) -> None:
        with self._lock:
            self._pending.clear()
            self._recent.clear()
            self._stats = UsageStats()

    def _log(self, level: int, event: Dict) -> None:
        event["timestamp"] = datetime.now(timezone.utc).isoformat()
        logger.log(level, json.dumps(event))


# Singleton instance
ai_monitor = AIMonitor()
