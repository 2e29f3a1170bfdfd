from fastapi import APIRouter, Response
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST, CollectorRegistry
from prometheus_client.multiprocess import MultiProcessCollector
import os

router = APIRouter()

registry = CollectorRegistry()

if 'PROMETHEUS_MULTIPROC_DIR' in os.environ:
    MultiProcessCollector(registry)

timer_transitions = Counter(
    'pomotrack_timer_transitions_total',
    'Timer state transitions by action',
    labelnames=['action'],
    registry=registry
)

timer_phase_starts = Counter(
    'pomotrack_timer_phase_starts_total',
    'Timer phases started by phase',
    labelnames=['phase'],
    registry=registry
)

sentiment_analyses = Counter(
    'pomotrack_sentiment_analyses_total',
    'Sentiment results recorded on timer sessions',
    labelnames=['label'],
    registry=registry
)

service_errors = Counter(
    'pomotrack_service_errors_total',
    'Requests rejected by a service, by status code',
    labelnames=['status'],
    registry=registry
)

SENTIMENT_LABELS = ('POSITIVE', 'NEUTRAL', 'NEGATIVE')


def sentiment_label_value(label) -> str:
    """Collapse client-supplied labels onto a fixed set of series"""
    if label is None or not str(label).strip():
        return 'NONE'
    value = str(label).strip().upper()
    return value if value in SENTIMENT_LABELS else 'OTHER'


@router.get("/metrics")
async def get_metrics():
    """
    Prometheus metrics endpoint.
    Exposes application metrics in Prometheus text format.
    """
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)
