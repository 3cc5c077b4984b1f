"""Clients for the external services a decision task depends on."""

from clients.base import BaseClient, ClientError
from clients.decision_service import DecisionServiceClient

__all__ = [
    "BaseClient",
    "ClientError",
    "DecisionServiceClient",
]
