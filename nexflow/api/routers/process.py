"""Question processing API router."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from nexflow.api.models import ProcessRequest, ProcessResponse, ErrorResponse
from nexflow.infra.errors import ValidationError
from nexflow.services.relay import RequestRelay, get_relay

logger = logging.getLogger(__name__)

router = APIRouter()

QUESTION_REQUIRED = "Question is required"


@router.post(
    "/process",
    tags=["Process"],
    response_model=ProcessResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def process_question(
    body: Optional[ProcessRequest] = None,
    relay: RequestRelay = Depends(get_relay),
):
    """
    Answer a natural-language question with a VeyraX tool.

    1. The language model picks a tool, method and parameters from the catalog
    2. The tool is called through VeyraX
    3. The language model explains the raw result

    **Example Request:**
    ```json
    {"question": "What's the weather in Paris?"}
    ```
    """
    logger.info("Process request received", extra={"body": body.model_dump() if body else None})

    if body is None or not body.question:
        raise ValidationError(QUESTION_REQUIRED)

    return await relay.process(body.question)
