"""Generation routes: text prompts and uploaded media."""

import logging
import uuid
from dataclasses import dataclass
from typing import Awaitable, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from ..config import settings
from ..errors import GatewayError, MissingFile, MissingPrompt, RemoteCallFailed
from ..models import (
    ContentPart,
    ErrorResponse,
    GenerationOutput,
    TextGenerationRequest,
    TextPart,
)
from ..services.gemini import ModelGateway
from ..services.media import MediaEncoder
from ..services.staging import staged_upload
from ..utils.debug_logger import log_incoming_request

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Generate"])

# Global gateway instance (will be set by main.py)
model_gateway: Optional[ModelGateway] = None


def init_gateway(gateway: Optional[ModelGateway]) -> None:
    """Initialize the model gateway instance."""
    global model_gateway
    model_gateway = gateway


def get_gateway() -> ModelGateway:
    """Dependency returning the configured model gateway."""
    if not model_gateway:
        raise HTTPException(status_code=503, detail="Model gateway not initialized")
    return model_gateway


@dataclass(frozen=True)
class MediaVariant:
    """Per-endpoint settings for media uploads."""

    endpoint: str
    field: str
    default_prompt: str
    required_prefix: Optional[str] = None


IMAGE = MediaVariant("generate-from-image", "image", "Describe this image:", "image/")
DOCUMENT = MediaVariant("generate-from-document", "document", "Analyze this document:")
AUDIO = MediaVariant(
    "generate-from-audio", "audio", "Transcribe or analyze the following audio:"
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    500: {"model": ErrorResponse, "description": "Model call failed"},
}


def resolve_prompt(provided: Optional[str], default: str) -> str:
    """Use the caller's prompt when given, otherwise the endpoint default."""
    return provided if provided else default


async def _generate(gateway: ModelGateway, parts: List[ContentPart]) -> str:
    result = await gateway.generate(parts)
    if not result.ok:
        raise RemoteCallFailed(result.error)
    return result.text


async def _respond(endpoint: str, pipeline: Awaitable[str]) -> JSONResponse:
    """Run a generation pipeline and map its outcome to a JSON response."""
    try:
        output = await pipeline
    except GatewayError as e:
        logger.warning(f"{endpoint} failed: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content=ErrorResponse(error=e.message).model_dump(),
        )
    except Exception as e:
        logger.exception(f"{endpoint} failed unexpectedly")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(e)).model_dump(),
        )
    else:
        return JSONResponse(content=GenerationOutput(output=output).model_dump())
    finally:
        logger.info(f"{endpoint} request completed")


async def _generate_text(prompt: Optional[str], gateway: ModelGateway) -> str:
    request_id = f"req_{uuid.uuid4().hex[:12]}"
    log_incoming_request(request_id, "/generate-text", prompt=prompt)

    if not prompt:
        raise MissingPrompt()
    return await _generate(gateway, [TextPart(text=prompt)])


async def _generate_from_media(
    variant: MediaVariant,
    prompt: Optional[str],
    upload: Optional[UploadFile],
    gateway: ModelGateway,
) -> str:
    """
    Stage the upload, encode it after the prompt and call the model.

    The staged file is released when the block exits, whichever way it exits.
    """
    if upload is None or not upload.filename:
        raise MissingFile(variant.field)

    async with staged_upload(upload, settings.UPLOAD_DIR) as file:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        log_incoming_request(
            request_id,
            f"/{variant.endpoint}",
            prompt=prompt,
            filename=file.filename,
            media_type=file.media_type,
        )

        media = await MediaEncoder.encode(file, variant.required_prefix)
        parts: List[ContentPart] = [
            TextPart(text=resolve_prompt(prompt, variant.default_prompt)),
            media,
        ]
        return await _generate(gateway, parts)


@router.post(
    "/generate-text",
    response_model=GenerationOutput,
    responses=ERROR_RESPONSES,
)
async def generate_text(
    request: TextGenerationRequest,
    gateway: ModelGateway = Depends(get_gateway),
):
    """Generate text from a prompt."""
    return await _respond("generate-text", _generate_text(request.prompt, gateway))


@router.post(
    "/generate-from-image",
    response_model=GenerationOutput,
    responses=ERROR_RESPONSES,
)
async def generate_from_image(
    image: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    gateway: ModelGateway = Depends(get_gateway),
):
    """Describe an uploaded image. Only ``image/*`` uploads are accepted."""
    return await _respond(
        IMAGE.endpoint, _generate_from_media(IMAGE, prompt, image, gateway)
    )


@router.post(
    "/generate-from-document",
    response_model=GenerationOutput,
    responses=ERROR_RESPONSES,
)
async def generate_from_document(
    document: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    gateway: ModelGateway = Depends(get_gateway),
):
    """Analyze an uploaded document."""
    return await _respond(
        DOCUMENT.endpoint, _generate_from_media(DOCUMENT, prompt, document, gateway)
    )


@router.post(
    "/generate-from-audio",
    response_model=GenerationOutput,
    responses=ERROR_RESPONSES,
)
async def generate_from_audio(
    audio: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    gateway: ModelGateway = Depends(get_gateway),
):
    """Transcribe or analyze an uploaded audio file."""
    return await _respond(
        AUDIO.endpoint, _generate_from_media(AUDIO, prompt, audio, gateway)
    )
