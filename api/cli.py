#!/usr/bin/env python3
"""CLI for certificate issuance and verification.

Runs the same services as the API against whatever AWS environment the
settings point at. Set IS_OFFLINE=true to also get ./certificate.pdf.

Usage:
    python -m cli <command>

Commands:
    issue   Issue (or re-issue) a certificate
    verify  Verify a certificate by id
"""

import argparse
import asyncio
import json
import sys

from core.config import get_settings
from core.dependencies import build_dependencies
from core.logger import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)


def cmd_issue(certificate_id: str, name: str, grade: str) -> int:
    """Issue a certificate and print the public URL."""
    from services.certificates_service import (
        ISSUED_MESSAGE,
        CertificateIssueError,
        issue_certificate,
    )

    deps = build_dependencies(get_settings())
    try:
        result = asyncio.run(
            issue_certificate(
                deps, certificate_id=certificate_id, name=name, grade=grade
            )
        )
    except CertificateIssueError as e:
        logger.error(
            "cli.issue.failed", certificate_id=certificate_id, failure_kind=e.kind
        )
        return 1

    print(json.dumps({"message": ISSUED_MESSAGE, "url": result.url}))
    return 0


def cmd_verify(certificate_id: str) -> int:
    """Verify a certificate and print the result."""
    from services.certificates_service import (
        INVALID_MESSAGE,
        VALID_MESSAGE,
        verify_certificate,
    )

    deps = build_dependencies(get_settings())
    result = asyncio.run(verify_certificate(deps, certificate_id))

    if not result.is_valid or result.record is None:
        print(json.dumps({"message": INVALID_MESSAGE}))
        return 1

    print(
        json.dumps(
            {"message": VALID_MESSAGE, "name": result.record.name, "url": result.url}
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Certificates CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    issue_parser = subparsers.add_parser(
        "issue",
        help="Issue (or re-issue) a certificate",
    )
    issue_parser.add_argument("--id", required=True, dest="certificate_id")
    issue_parser.add_argument("--name", required=True)
    issue_parser.add_argument("--grade", required=True)

    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a certificate by id",
    )
    verify_parser.add_argument("--id", required=True, dest="certificate_id")

    args = parser.parse_args(argv)

    if args.command == "issue":
        return cmd_issue(args.certificate_id, args.name, args.grade)
    elif args.command == "verify":
        return cmd_verify(args.certificate_id)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
