"""Turn an inbound HTTP request into a ComparisonRequest."""

import json
from typing import Any

from fastapi import Request
from starlette.datastructures import FormData, UploadFile

from rfq_compliance.errors import InputValidationError
from rfq_compliance.models.documents import Document, DocumentOrigin
from rfq_compliance.models.requests import ComparisonMode, ComparisonRequest


FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
RFQ_FIELDS = ("rfq", "rfq_file")
PROPOSAL_FIELDS = ("proposal", "proposal_file")


async def parse_comparison_request(
    request: Request,
    mode: ComparisonMode,
    max_upload_bytes: int,
) -> ComparisonRequest:
    """Accept a JSON body or a form with file / text fields.

    Missing documents are left as None; the orchestrator rejects them.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        try:
            rfq, proposal = await _documents_from_form(form, max_upload_bytes)
        finally:
            await form.close()
    else:
        rfq, proposal = await _documents_from_json(request)

    return ComparisonRequest(rfq=rfq, proposal=proposal, mode=mode)


async def _documents_from_json(request: Request) -> tuple[Document | None, Document | None]:
    body = await request.body()
    if not body.strip():
        return None, None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise InputValidationError("Request body must be valid JSON") from e
    if not isinstance(payload, dict):
        raise InputValidationError("Request body must be a JSON object")

    return (
        _text_document(payload.get("rfq"), DocumentOrigin.RFQ),
        _text_document(payload.get("proposal"), DocumentOrigin.PROPOSAL),
    )


def _text_document(value: Any, origin: DocumentOrigin) -> Document | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InputValidationError(f"'{origin.value}' must be a string")
    return Document.from_text(value, origin)


async def _documents_from_form(
    form: FormData,
    max_upload_bytes: int,
) -> tuple[Document | None, Document | None]:
    rfq_value = _first_present(form, RFQ_FIELDS)
    proposal_value = _first_present(form, PROPOSAL_FIELDS)

    files = [f for f in form.getlist("files") if _is_present(f)]
    if rfq_value is None and proposal_value is None and files:
        if len(files) != 2:
            raise InputValidationError("Expected exactly two files: RFQ and Proposal")
        rfq_value, proposal_value = files

    return (
        await _form_document(rfq_value, DocumentOrigin.RFQ, max_upload_bytes),
        await _form_document(proposal_value, DocumentOrigin.PROPOSAL, max_upload_bytes),
    )


def _is_present(value: Any) -> bool:
    if isinstance(value, UploadFile):
        # Browsers send an unnamed empty part for an unset file input
        return bool(value.filename) or bool(value.size)
    return value is not None and value != ""


def _first_present(form: FormData, fields: tuple[str, ...]) -> Any:
    for field in fields:
        value = form.get(field)
        if _is_present(value):
            return value
    return None


async def _form_document(
    value: Any,
    origin: DocumentOrigin,
    max_upload_bytes: int,
) -> Document | None:
    if value is None:
        return None
    if isinstance(value, UploadFile):
        content = await value.read()
        if len(content) > max_upload_bytes:
            raise InputValidationError(
                f"{origin.value.upper()} file exceeds the {max_upload_bytes} byte upload limit"
            )
        return Document(
            content=content,
            origin=origin,
            filename=value.filename or "",
            media_type=value.content_type,
        )
    return Document.from_text(str(value), origin)
