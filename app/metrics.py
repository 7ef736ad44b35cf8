from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request
import time

# API Metrics
api_request_duration_seconds = Histogram(
    "nexiplay_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter("nexiplay_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"])

# Catalog Metrics
content_deletions_total = Counter("nexiplay_content_deletions_total", "Content deletions", ["status"])

storage_cleanup_failures_total = Counter(
    "nexiplay_storage_cleanup_failures_total", "Storage removals that failed during content deletion"
)

storage_objects_removed_total = Counter("nexiplay_storage_objects_removed_total", "Objects removed from storage")

uploads_total = Counter("nexiplay_uploads_total", "Image uploads", ["status"])

dead_links_total = Gauge("nexiplay_dead_links", "Expired provider links found by the last report", ["kind"])


def init_metrics(app):
    @app.route("/api/metrics")
    def metrics():
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        request.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - getattr(request, "start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    app.logger.info("Prometheus metrics initialized at /api/metrics")
