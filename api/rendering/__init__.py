"""Rendering module for presentation concerns.

This module handles all presentation/rendering logic:
- Certificate template fill-in
- HTML to PDF conversion

This separates presentation concerns from the issuance workflow in services.
"""

from rendering.certificates import (
    CertificateTemplate,
    build_template_data,
    format_issue_date,
)
from rendering.pdf import LaunchProfile, PdfRenderer

__all__ = [
    "CertificateTemplate",
    "LaunchProfile",
    "PdfRenderer",
    "build_template_data",
    "format_issue_date",
]
