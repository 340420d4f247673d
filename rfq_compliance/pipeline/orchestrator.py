"""Compliance comparison pipeline."""

import time

from langsmith import traceable
from starlette.concurrency import run_in_threadpool

from rfq_compliance.errors import InputValidationError
from rfq_compliance.llm.client import ModelClient
from rfq_compliance.llm.output_parser import ResponseDecoder, StructuredOutputParser
from rfq_compliance.llm.prompts import PromptBuilder
from rfq_compliance.loaders.registry import DocumentExtractor
from rfq_compliance.models.documents import Document
from rfq_compliance.models.requests import ComparisonMode, ComparisonRequest
from rfq_compliance.models.responses import ComplianceResult
from rfq_compliance.utils.logging import LoggerMixin


class ComplianceOrchestrator(LoggerMixin):
    """Validate, extract, prompt, call the model, normalize.

    Temporary files for uploads are owned by the extractor and are gone by
    the time ``handle`` returns or raises.
    """

    def __init__(
        self,
        model_client: ModelClient,
        extractor: DocumentExtractor | None = None,
        prompt_builder: PromptBuilder | None = None,
        decoder: ResponseDecoder | None = None,
        parser: StructuredOutputParser | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            model_client: Shared model client built at startup.
            extractor: Document text extractor.
            prompt_builder: Prompt builder.
            decoder: Response shape decoder.
            parser: Structured findings parser.
        """
        self._client = model_client
        self._extractor = extractor or DocumentExtractor()
        self._prompts = prompt_builder or PromptBuilder()
        self._decoder = decoder or ResponseDecoder()
        self._parser = parser or StructuredOutputParser()

    @traceable(name="compliance_check")
    async def handle(self, request: ComparisonRequest) -> ComplianceResult:
        """Run one comparison.

        Raises:
            InputValidationError: A document is missing, empty or has no text.
            ExtractionError: A document could not be read.
            UpstreamError: The model call failed or broke the output contract.
        """
        start_time = time.perf_counter()
        rfq, proposal = self._validate(request)

        self.log_info(
            "Compliance check started",
            mode=request.mode.value,
            rfq_bytes=rfq.size_bytes,
            proposal_bytes=proposal.size_bytes,
        )

        rfq_text = await self._extract(rfq)
        proposal_text = await self._extract(proposal)

        prompt = self._prompts.build(rfq_text, proposal_text, request.mode)
        raw = await self._client.generate(prompt)
        decoded = self._decoder.decode(raw)

        findings = None
        if request.mode == ComparisonMode.STRUCTURED:
            findings = self._parser.parse(decoded.text)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        self.log_info(
            "Compliance check complete",
            mode=request.mode.value,
            response_shape=decoded.shape.value,
            chars=len(decoded.text),
            findings=None if findings is None else len(findings),
            processing_time_ms=round(elapsed_ms, 1),
        )

        return ComplianceResult(
            mode=request.mode,
            text=decoded.text,
            findings=findings,
            processing_time_ms=elapsed_ms,
        )

    def _validate(self, request: ComparisonRequest) -> tuple[Document, Document]:
        if (
            request.rfq is None
            or request.proposal is None
            or request.rfq.is_empty
            or request.proposal.is_empty
        ):
            noun = "file" if request.is_upload else "text"
            raise InputValidationError(f"Missing RFQ or Proposal {noun}")
        return request.rfq, request.proposal

    async def _extract(self, document: Document) -> str:
        text = await run_in_threadpool(self._extractor.extract, document)
        if not text.strip():
            raise InputValidationError(
                f"No text could be extracted from the {document.origin.value.upper()} document"
            )
        return text
