from __future__ import annotations

from dataclasses import dataclass
from threading import Lock


@dataclass
class EndpointMetric:
    total_requests: int = 0
    total_duration_ms: float = 0.0
    error_count: int = 0


@dataclass
class SelectionMetric:
    validations: int = 0
    invalid_selections: int = 0
    rejected_actions: int = 0


class InMemoryRequestMetrics:
    def __init__(self) -> None:
        self._metrics: dict[tuple[str, str], EndpointMetric] = {}
        self._tenant_metrics: dict[str, EndpointMetric] = {}
        self._selection_metrics: dict[str, SelectionMetric] = {}
        self._lock = Lock()

    def observe(
        self,
        endpoint: str,
        method: str,
        status_code: int,
        duration_ms: float,
        tenant: str | None = None,
    ) -> None:
        key = (endpoint, method)
        with self._lock:
            metric = self._metrics.setdefault(key, EndpointMetric())
            metric.total_requests += 1
            metric.total_duration_ms += duration_ms
            if status_code >= 400:
                metric.error_count += 1

            if tenant:
                tenant_metric = self._tenant_metrics.setdefault(tenant, EndpointMetric())
                tenant_metric.total_requests += 1
                tenant_metric.total_duration_ms += duration_ms
                if status_code >= 400:
                    tenant_metric.error_count += 1

    def observe_selection(self, tenant: str, *, is_valid: bool, action_accepted: bool = True) -> None:
        with self._lock:
            metric = self._selection_metrics.setdefault(tenant, SelectionMetric())
            metric.validations += 1
            if not is_valid:
                metric.invalid_selections += 1
            if not action_accepted:
                metric.rejected_actions += 1

    def snapshot(self) -> dict[str, dict[str, float | int]]:
        with self._lock:
            result: dict[str, dict[str, float | int]] = {}
            for (endpoint, method), metric in self._metrics.items():
                avg = metric.total_duration_ms / metric.total_requests if metric.total_requests else 0.0
                result[f"{method} {endpoint}"] = {
                    "total_requests": metric.total_requests,
                    "total_duration_ms": round(metric.total_duration_ms, 2),
                    "avg_duration_ms": round(avg, 2),
                    "error_count": metric.error_count,
                }
            return result

    def snapshot_per_tenant(self) -> dict[str, dict[str, float | int]]:
        with self._lock:
            result: dict[str, dict[str, float | int]] = {}
            for tenant in sorted(set(self._tenant_metrics) | set(self._selection_metrics)):
                metric = self._tenant_metrics.get(tenant, EndpointMetric())
                avg = metric.total_duration_ms / metric.total_requests if metric.total_requests else 0.0
                selection = self._selection_metrics.get(tenant, SelectionMetric())
                result[tenant] = {
                    "requests": metric.total_requests,
                    "errors": metric.error_count,
                    "avg_latency_ms": round(avg, 2),
                    "selection_validations": selection.validations,
                    "invalid_selections": selection.invalid_selections,
                    "rejected_selection_actions": selection.rejected_actions,
                }
            return result

    def reset(self) -> None:
        with self._lock:
            self._metrics.clear()
            self._tenant_metrics.clear()
            self._selection_metrics.clear()


request_metrics = InMemoryRequestMetrics()
