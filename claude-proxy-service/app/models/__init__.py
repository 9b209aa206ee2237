"""Pydantic models for response serialization.

This module contains data models used for:
- Health and test endpoint payloads
- The JSON error body shared by every failure path
"""

from pydantic import BaseModel


class ErrorBody(BaseModel):
    """JSON body of every locally produced error response."""

    error: str


class ServiceStatus(BaseModel):
    """Payload of the root health check."""

    status: str
    timestamp: str
    usage: str
    note: str


class PingStatus(BaseModel):
    """Payload of the ``/test`` ping endpoint."""

    message: str
    status: str


class HealthStatus(BaseModel):
    """Payload of the ``/health`` liveness probe."""

    status: str
    version: str
    environment: str
