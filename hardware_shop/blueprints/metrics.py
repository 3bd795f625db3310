"""
Prometheus metrics for the shop API.

Request latency/status per endpoint plus sale outcomes, scraped from /metrics.
"""
import time

from flask import Blueprint, Response, request, g
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

metrics_bp = Blueprint('metrics', __name__)

api_requests_total = Counter(
    'shop_api_requests_total',
    'API requests by endpoint and response status',
    ['method', 'endpoint', 'status']
)

api_request_seconds = Histogram(
    'shop_api_request_seconds',
    'API request latency',
    ['endpoint'],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

# outcome: recorded, insufficient_stock, invalid, reversed
sale_events_total = Counter(
    'shop_sale_events_total',
    'Sale attempts and reversals by outcome',
    ['outcome']
)

units_sold_total = Counter(
    'shop_units_sold_total',
    'Stock units removed by recorded sales'
)


def count_sale(outcome, units=0):
    """Record a sale outcome, and the units it moved when it was recorded."""
    sale_events_total.labels(outcome=outcome).inc()
    if units:
        units_sold_total.inc(units)


def setup_metrics_instrumentation(app):
    """Time every request and count it by endpoint and status."""

    @app.before_request
    def start_request_timer():
        g.request_started_at = time.perf_counter()

    @app.after_request
    def observe_request(response):
        started = g.pop('request_started_at', None)
        if started is None:
            return response

        endpoint = request.endpoint or 'unknown'
        try:
            api_request_seconds.labels(endpoint=endpoint).observe(time.perf_counter() - started)
            api_requests_total.labels(
                method=request.method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
        except Exception as e:
            app.logger.warning(f"Failed to record metrics: {e}")

        return response


@metrics_bp.route('/metrics')
def metrics():
    """Prometheus scrape endpoint; unauthenticated, keep it off public networks."""
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
