"""Chat API routes."""

import traceback

from fastapi import APIRouter, HTTPException

from gitbrand.api.orchestrator_store import get_orchestrator
from gitbrand.api.schemas import (
    ChatRequest,
    ChatResponse,
    ConfirmResponse,
    HistoryResponse,
    SuccessResponse,
)
from gitbrand.errors import ConversationBusyError
from gitbrand.utils.logging import logger
from gitbrand.utils.response_formatter import ResponseFormatter

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def send_message(request: ChatRequest):
    """
    Send a message to the assistant.
    A directive in the reply is staged, never executed.
    """
    if not request.message.strip():
        raise HTTPException(status_code=422, detail="Message is empty")

    logger.info(f"Received message: {request.message[:50]}...")

    try:
        orch = await get_orchestrator()
        outcome = await orch.chat(request.message)
    except ConversationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        error_detail = f"{type(e).__name__}: {str(e)}"
        logger.error(f"Chat error: {error_detail}")
        logger.error(traceback.format_exc())
        raise HTTPException(status_code=500, detail=error_detail)

    return ChatResponse(
        turn_index=outcome.turn_index,
        content=outcome.content,
        pending_action=outcome.pending.to_dict() if outcome.pending else None,
        dropped_action=outcome.dropped.to_dict() if outcome.dropped else None,
    )


@router.post("/confirm", response_model=ConfirmResponse)
async def confirm_action():
    """Execute the pending action attached to the latest assistant turn."""
    orch = await get_orchestrator()
    try:
        result = await orch.confirm()
    except ConversationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result is None:
        return ConfirmResponse(executed=False)
    return ConfirmResponse(executed=True, result=result.to_dict())


@router.post("/cancel", response_model=SuccessResponse)
async def cancel_action():
    """Drop the pending action without side effects."""
    orch = await get_orchestrator()
    cancelled = orch.cancel()
    return SuccessResponse(
        success=cancelled is not None,
        message=ResponseFormatter.format_cancelled() if cancelled else "Nothing to cancel",
    )


@router.post("/clear")
async def clear_chat():
    """Clear conversation history."""
    orch = await get_orchestrator()
    try:
        orch.clear_conversation()
    except ConversationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"status": "ok"}


@router.get("/history", response_model=HistoryResponse)
async def get_history():
    orch = await get_orchestrator()
    pending = orch.actionable_pending
    return HistoryResponse(
        turns=[turn.to_message() for turn in orch.log.turns],
        pending_action=pending.to_dict() if pending else None,
    )


@router.get("/status")
async def get_status():
    """Get orchestrator status."""
    orch = await get_orchestrator()
    return orch.get_status()
