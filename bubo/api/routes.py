from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.facade import AgentFacade

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICES = ("fastapi", "google-adk", "firebase", "sqlite", "google-cloud")


def get_facade(request: Request) -> AgentFacade:
    return request.app.state.facade


async def _read_body(request: Request) -> dict:
    # An empty or unparsable body is treated as {}
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post("/ask")
async def ask(request: Request, facade: AgentFacade = Depends(get_facade)):
    """Forward ``message`` to the agent, unvalidated."""
    body = await _read_body(request)
    try:
        response = await facade.generate(body.get("message"))
    except Exception as e:
        logger.exception("Agent error")
        return JSONResponse(status_code=500, content={"error": str(e)})
    return {"response": response}


@router.get("/health")
def health():
    """Static status; no dependency is contacted."""
    return {"status": "ok", "services": list(SERVICES)}
