"""Client for a REST decision-evaluation service."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from models.schemas import AuditResult, EvaluationRequest
from clients.base import BaseClient, ClientError


logger = logging.getLogger(__name__)


class DecisionServiceClient(BaseClient):
    """
    DecisionEvaluationService over HTTP.

    Transport and protocol problems are reported as a failed AuditResult so
    they reach the decision task the same way an evaluation failure does.
    """

    name = "decision_service"

    EXECUTE_PATH = "/dmn-rule/execute-decision"

    def evaluate(self, request: EvaluationRequest) -> AuditResult:
        # PydanticSerializationError is a ValueError
        try:
            payload = request.model_dump(mode="json", by_alias=True)
        except ValueError as e:
            return self._failed(request, f"Failed to serialize request: {e}")

        logger.info("Evaluating decision %s for execution %s", request.decision_key, request.execution_id)

        try:
            response = self.post(self.EXECUTE_PATH, json=payload)
            data = response.json()
        except ClientError as e:
            return self._failed(request, str(e))
        except ValueError as e:
            return self._failed(request, f"Failed to parse response: {e}")

        try:
            return AuditResult.model_validate(data)
        except ValidationError as e:
            return self._failed(request, f"Unexpected audit result: {e.error_count()} validation error(s)")

    def _failed(self, request: EvaluationRequest, message: str) -> AuditResult:
        logger.error("Decision %s could not be evaluated: %s", request.decision_key, message)
        return AuditResult(
            decision_key=request.decision_key,
            failed=True,
            exception_message=message,
        )
