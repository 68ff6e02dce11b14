"""
Routes package for the Task Service.

This package contains the ``api`` blueprint: JSON endpoints for tasks,
feature flags and the health check.
"""
