from prometheus_fastapi_instrumentator import Instrumentator

def instrument_app(app):
    """
    Instruments the Contact Book API with Prometheus metrics and serves them on /metrics.
    Health probes and the metrics endpoint itself are not counted.
    """
    Instrumentator(
        excluded_handlers=["/metrics", "/api/health"],
    ).instrument(app).expose(app, include_in_schema=False)
