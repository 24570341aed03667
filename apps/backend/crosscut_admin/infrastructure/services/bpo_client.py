"""
============================================================
TARJETA CRC — infrastructure/services/bpo_client.py
============================================================
Class: BpoClient

Responsibilities:
  - Implementar WorkflowTriggerGateway contra CrossCut BPO.
  - POST /v1/execute-workflow con {trigger_event, payload}.
  - Mapear la respuesta {status, workflow_id, message, document_url}
    a WorkflowTriggerAck.
  - Health check de BPO (heredado de HttpServiceClient).

Collaborators:
  - infrastructure.services.http_service.HttpServiceClient
  - domain.entities (WorkflowTriggerRequest, WorkflowTriggerAck)
============================================================
"""

from __future__ import annotations

import httpx

from ...crosscutting.exceptions import UpstreamServiceError
from ...domain.entities import WorkflowTriggerAck, WorkflowTriggerRequest
from .http_service import HttpServiceClient

BPO_SERVICE = "bpo"
_EXECUTE_WORKFLOW_PATH = "/v1/execute-workflow"


class BpoClient(HttpServiceClient):
    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(BPO_SERVICE, base_url, timeout_s=timeout_s, client=client)

    async def trigger(self, request: WorkflowTriggerRequest) -> WorkflowTriggerAck:
        """Dispara un workflow. Una sola llamada: un retry crearía otro workflow."""
        body = await self._request_json(
            "POST",
            _EXECUTE_WORKFLOW_PATH,
            operation="execute_workflow",
            json={"trigger_event": request.trigger_event, "payload": request.payload},
        )

        workflow_id = body.get("workflow_id")
        if not isinstance(workflow_id, str) or not workflow_id:
            raise UpstreamServiceError(
                "bpo execute_workflow response has no workflow_id",
                service=BPO_SERVICE,
            )

        document_url = body.get("document_url")
        return WorkflowTriggerAck(
            status=str(body.get("status") or ""),
            workflow_id=workflow_id,
            message=str(body.get("message") or ""),
            document_url=document_url if isinstance(document_url, str) and document_url else None,
        )
