"""Metrics collection for the request pipeline."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RequestMetrics:
    """Metrics for dispatched requests.

    Singleton class that tracks responses by status, failures by error
    code, interceptor recoveries and error interceptor failures.
    """

    requests_total: dict[int, int] = field(default_factory=dict)
    failures_total: dict[str, int] = field(default_factory=dict)
    recoveries_total: int = 0
    error_interceptor_failures_total: int = 0
    duration_ms_total: float = 0.0
    request_count: int = 0

    _instance: ClassVar["RequestMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RequestMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_request(self, status: int, duration_ms: float) -> None:
        """Record a completed call.

        Args:
            status: Final status reported to the caller.
            duration_ms: Wall time of the call in milliseconds.
        """
        self.requests_total[status] = self.requests_total.get(status, 0) + 1
        self.duration_ms_total += duration_ms
        self.request_count += 1

    def record_failure(self, code: str | None) -> None:
        """Record a normalized failure.

        Args:
            code: Error code of the failure, if any.
        """
        key = code or "UNKNOWN"
        self.failures_total[key] = self.failures_total.get(key, 0) + 1

    def record_recovery(self) -> None:
        """Record an error promoted to a success by an interceptor."""
        self.recoveries_total += 1

    def record_error_interceptor_failure(self) -> None:
        """Record an error interceptor that raised."""
        self.error_interceptor_failures_total += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "failures_total": dict(self.failures_total),
            "recoveries_total": self.recoveries_total,
            "error_interceptor_failures_total": self.error_interceptor_failures_total,
            "duration_ms_total": self.duration_ms_total,
            "request_count": self.request_count,
        }

    @property
    def avg_duration_ms(self) -> float:
        """Calculate average call duration.

        Returns:
            Average duration in milliseconds.
        """
        if self.request_count == 0:
            return 0.0
        return self.duration_ms_total / self.request_count
