from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect
import logging

from config import Settings
from utils.payload import matches_branch
from utils.signature import SIGNATURE_HEADER, parse_signature_header, verify_signature
from utils.sync import SyncExecutionError, run_pull

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_SIGNATURE = "Invalid HMAC signature"
NOT_MAIN_BRANCH = "Not main branch"
BODY_NOT_RECEIVED = "Could not receive body"

def unauthorized(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=401)

@router.post("/payload", response_class=PlainTextResponse)
async def process_payload(request: Request):
    """Validate a GitHub push delivery and pull the working copy.

    The signature is checked before the branch filter, so an unsigned
    request cannot tell whether its payload would have matched. Pull
    results, including failures, are reported with 200: the delivery was
    authentic and handled, the outcome is in the body.
    """
    settings: Settings = request.app.state.settings

    signature = parse_signature_header(request.headers.get(SIGNATURE_HEADER))
    if signature is None:
        logger.warning(f"{SIGNATURE_HEADER} missing or not in algorithm=hex format")
        return unauthorized(INVALID_SIGNATURE)

    try:
        raw_body = await request.body()
    except ClientDisconnect:
        logger.error(BODY_NOT_RECEIVED)
        return PlainTextResponse(BODY_NOT_RECEIVED, status_code=500)

    try:
        body = raw_body.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Body is not valid UTF-8: {e}")
        return unauthorized(str(e))

    if not verify_signature(signature, raw_body, settings.secret):
        logger.warning(f"Invalid HMAC signature: {signature}")
        return unauthorized(INVALID_SIGNATURE)

    if not matches_branch(body, settings.repo_name, settings.branch):
        logger.info(f"Ignoring push that is not for {settings.repo_name} {settings.branch}")
        return unauthorized(NOT_MAIN_BRANCH)

    try:
        result = await run_pull(settings.repo_path, settings.sync_command, settings.sync_timeout)
    except SyncExecutionError as e:
        logger.error(f"Pull could not be executed: {e}")
        return PlainTextResponse(str(e), status_code=200)

    logger.info(f"Pull executed: {result.status.value}")
    if result.detail:
        logger.warning(f"git output:\n{result.detail}")
    return PlainTextResponse(str(result), status_code=200)
