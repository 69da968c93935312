# /healthlens/utils/metrics.py

from prometheus_client import Counter, Histogram

# This file defines all Prometheus metrics used for application monitoring.
# Centralizing them here makes them easy to find and manage.

# Flow Metrics
flow_invocations_counter = Counter('flow_invocations_total', 'Flow invocations by outcome', ['flow', 'outcome'])
flow_duration_histogram = Histogram('flow_duration_seconds', 'Flow invocation duration in seconds', ['flow'])

# Model Endpoint Metrics
ai_requests_counter = Counter('ai_requests_total', 'Total AI requests', ['model', 'status'])

# HTTP Metrics
response_time_histogram = Histogram('response_time_seconds', 'Response time in seconds', ['endpoint'])
