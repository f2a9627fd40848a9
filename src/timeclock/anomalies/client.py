from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.exceptions import AssessmentServiceError
from .model import AnomalyAssessmentRequest
from .prompt import render_prompt

logger = logging.getLogger(__name__)


class AnomalyAssessmentClient:
    """HTTP client for the external reasoning service.

    POSTs the rendered prompt plus the structured input and returns the raw
    ``output`` object of the reply (unvalidated; may be missing).
    """

    def __init__(
        self,
        base_url: str,
        *,
        model: str = "attendance-anomaly",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._model = model
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def assess(self, request: AnomalyAssessmentRequest) -> Optional[Any]:
        payload = {
            "model": self._model,
            "prompt": render_prompt(request),
            "input": request.model_dump(by_alias=True),
        }
        try:
            resp = self._http.post("/v1/assessments", json=payload)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as exc:
            raise AssessmentServiceError(f"Assessment service returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise AssessmentServiceError(f"Assessment service unreachable: {exc}") from exc
        except ValueError as exc:
            raise AssessmentServiceError("Assessment service returned a non-JSON body") from exc
        except Exception as exc:
            raise AssessmentServiceError(f"Assessment request failed: {exc}") from exc

        if not isinstance(body, dict):
            logger.error("Assessment reply is not an object: %r", body)
            return None
        return body.get("output")
