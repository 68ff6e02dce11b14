"""
REST API Endpoints for the Task Service.

Exposes CRUD over the in-memory task collection, the per-user feature flag
listing and a health check. Handlers are thin: they extract the user
context and the JSON body, delegate to ``TaskService`` and shape the
response. Errors raised by the service are turned into ``{"error": ...}``
bodies by the handlers at the bottom of this module.

Endpoints:
    GET    /health              - Service health check
    GET    /tasks               - List all tasks in creation order
    GET    /tasks/<id>          - Retrieve a single task
    POST   /tasks               - Create a new task
    PUT    /tasks/<id>          - Partially update a task
    DELETE /tasks/<id>          - Delete a task
    GET    /feature-flags       - Flags evaluated for the calling user
"""

from __future__ import annotations

import logging
import os

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..context import user_context_from_headers
from ..errors import TaskServiceError
from ..service import TaskService
from ..validation import ensure_payload

logger = logging.getLogger(__name__)

api_bp = Blueprint("task_api", __name__)


def _service() -> TaskService:
    return current_app.extensions["task_service"]


def _json_body() -> dict:
    """Decoded request body; an absent or malformed body counts as ``{}``."""
    return ensure_payload(request.get_json(silent=True))


# =====================================================================
# API Endpoints
# =====================================================================


@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Liveness probe for load balancers and orchestrators."""
    return (
        jsonify(
            {
                "status": "healthy",
                "service": "tasks",
                "environment": os.getenv("ENVIRONMENT", "unknown"),
            }
        ),
        200,
    )


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """List every task in insertion order."""
    tasks = _service().list_tasks()
    logger.info("GET /tasks - returning %s tasks", len(tasks))
    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks/<task_id>", methods=["GET"])
def get_task(task_id: str) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Returns:
        200 with the task, 400 for a malformed id, 404 if it does not exist.
    """
    logger.info("GET /tasks/%s - Fetching task", task_id)
    task = _service().get_task(task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (optional, default "")
        completed: Completion flag (optional, default false)
        priority: low/medium/high (requires the task-priorities flag)
        tags: List of strings (requires the advanced-filtering flag)

    Returns:
        201 with the created task, or 400 if validation fails.
    """
    logger.info("POST /tasks - Creating new task")
    user_context = user_context_from_headers(request.headers)
    task = _service().create_task(_json_body(), user_context)
    return jsonify(task.to_dict()), 201


@api_bp.route("/tasks/<task_id>", methods=["PUT"])
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update the supplied fields of an existing task.

    Returns:
        200 with the updated task, 400 on invalid id or payload, 404 if the
        task does not exist.
    """
    logger.info("PUT /tasks/%s - Updating task", task_id)
    user_context = user_context_from_headers(request.headers)
    task = _service().update_task(task_id, _json_body(), user_context)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id: str) -> tuple[str, int]:
    """Delete a task; 204 with an empty body on success."""
    logger.info("DELETE /tasks/%s - Deleting task", task_id)
    _service().delete_task(task_id)
    return "", 204


@api_bp.route("/feature-flags", methods=["GET"])
def get_feature_flags() -> tuple[Response, int]:
    """Report every known feature flag as evaluated for the calling user."""
    user_context = user_context_from_headers(request.headers)
    return jsonify(_service().feature_flags(user_context)), 200


# =====================================================================
# Error Handlers
# =====================================================================


@api_bp.app_errorhandler(TaskServiceError)
def task_service_error(error: TaskServiceError) -> tuple[Response, int]:
    """Render domain errors as ``{"error": message}`` with their status."""
    if error.status_code < 500:
        logger.warning("Request rejected (%s): %s", error.status_code, error.message)
    return jsonify({"error": error.message}), error.status_code


@api_bp.app_errorhandler(HTTPException)
def http_error(error: HTTPException) -> tuple[Response, int]:
    """Routing errors (unknown path, wrong method) as JSON."""
    if error.code == 404:
        return jsonify({"error": "Resource not found"}), 404
    return jsonify({"error": error.description}), error.code or 500


@api_bp.app_errorhandler(Exception)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Anything unexpected becomes a generic 500."""
    logger.exception("Internal server error: %s", error)
    return jsonify({"error": "Internal server error"}), 500
