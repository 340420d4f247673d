"""Main entry point for the RFQ compliance checker."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rfq_compliance.config import get_settings
from rfq_compliance.errors import ComplianceCheckError, ConfigurationError
from rfq_compliance.llm.client import build_model_client
from rfq_compliance.loaders.registry import DocumentExtractor
from rfq_compliance.models.documents import Document, DocumentOrigin
from rfq_compliance.models.requests import ComparisonMode, ComparisonRequest
from rfq_compliance.pipeline.orchestrator import ComplianceOrchestrator
from rfq_compliance.utils.logging import get_logger, setup_logging


logger = get_logger(__name__)


def _load_document(path: Path, origin: DocumentOrigin) -> Document:
    return Document(content=path.read_bytes(), origin=origin, filename=path.name)


def run_check(rfq_path: Path, proposal_path: Path, structured: bool = False) -> int:
    """Compare two local files and print the analysis.

    Args:
        rfq_path: RFQ document (.txt, .pdf or .docx).
        proposal_path: Proposal document.
        structured: Ask for a JSON findings array instead of prose.

    Returns:
        Process exit code.
    """
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_as_json)

    try:
        request = ComparisonRequest(
            rfq=_load_document(rfq_path, DocumentOrigin.RFQ),
            proposal=_load_document(proposal_path, DocumentOrigin.PROPOSAL),
            mode=ComparisonMode.STRUCTURED if structured else ComparisonMode.FREEFORM,
        )
    except OSError as e:
        logger.error("Could not read input file", path=str(e.filename), error=e.strerror or str(e))
        return 1

    orchestrator = ComplianceOrchestrator(
        build_model_client(settings),
        extractor=DocumentExtractor(temp_dir=settings.upload_temp_dir),
    )

    try:
        result = asyncio.run(orchestrator.handle(request))
    except ComplianceCheckError as e:
        logger.error("Compliance check failed", error=e.message)
        return 1

    if result.findings is not None:
        print(json.dumps([f.model_dump(mode="json") for f in result.findings], indent=2))
    else:
        print(result.text)
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="RFQ Compliance - AI-powered RFQ/Proposal comparison")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Compare an RFQ file and a Proposal file")
    check_parser.add_argument("rfq", type=Path, help="RFQ document path")
    check_parser.add_argument("proposal", type=Path, help="Proposal document path")
    check_parser.add_argument("--structured", action="store_true", help="Return JSON findings")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start API server")
    server_parser.add_argument("--host", default="0.0.0.0", help="Host")
    server_parser.add_argument("--port", type=int, default=8080, help="Port")
    server_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args()

    try:
        if args.command == "check":
            sys.exit(run_check(args.rfq, args.proposal, args.structured))
        elif args.command == "serve":
            get_settings()
            import uvicorn
            uvicorn.run("rfq_compliance.api.app:app", host=args.host, port=args.port, reload=args.reload)
        else:
            parser.print_help()
    except ConfigurationError as e:
        logger.critical("Configuration error", error=e.message)
        sys.exit(1)


if __name__ == "__main__":
    main()
