"""
Structured JSON logging for the ranking pipeline.

Events emitted:
- products_ranked: product_count, prioritize, weight_total, top_score
- outfit_selected: strategy, filled, missing, total_cost, within_budget
- outfit_search_fallback: backtracking handed a long category list to greedy
- error: unknown outfit strategy names
"""
import logging
import json
import uuid

import config

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO), format="%(message)s")


def log_event(event: str, **kwargs):
    """
    Log a structured event with request_id and custom fields.
    Automatically generates request_id if not provided.
    """
    rec = {"event": event, "request_id": kwargs.pop("request_id", str(uuid.uuid4())), **kwargs}
    logging.info(json.dumps(rec, default=str))


def log_error(error: str, **kwargs):
    """
    Log an error event.
    """
    rec = {"event": "error", "error": error, "request_id": kwargs.pop("request_id", str(uuid.uuid4())), **kwargs}
    logging.error(json.dumps(rec, default=str))
