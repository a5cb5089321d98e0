"""Certificate rendering - template fill-in.

This module handles the presentation side of certificates:
- Loading the HTML template and the medal asset
- Building the fill-in data (including the display date)
- Rendering the template to HTML

Conversion of that HTML to PDF lives in rendering/pdf.py; the issuance
workflow itself lives in services/certificates_service.py.
"""

import base64
from datetime import datetime
from pathlib import Path
from typing import TypedDict

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

DATE_FORMAT = "%d/%m/%Y"


class CertificateTemplateData(TypedDict):
    """Fill-in values for the certificate template."""

    id: str
    name: str
    grade: str
    date: str
    medal: str


def format_issue_date(issued_at: datetime) -> str:
    """Format an issuance timestamp as DD/MM/YYYY."""
    return issued_at.strftime(DATE_FORMAT)


def build_template_data(
    certificate_id: str,
    name: str,
    grade: str,
    issued_at: datetime,
    medal: str,
) -> CertificateTemplateData:
    """Build the fill-in data for one rendering.

    Args:
        certificate_id: Certificate identifier printed on the document
        name: Holder's name, taken from the current request
        grade: Grade label, taken from the current request
        issued_at: Time of the issuance request
        medal: Base64-encoded medal image

    Returns:
        Template data ready for CertificateTemplate.render()
    """
    return {
        "id": certificate_id,
        "name": name,
        "grade": grade,
        "date": format_issue_date(issued_at),
        "medal": medal,
    }


class CertificateTemplate:
    """The certificate HTML template and its medal asset."""

    def __init__(
        self,
        templates_dir: Path,
        template_name: str = "certificate.html",
        medal_asset_name: str = "selo.png",
    ) -> None:
        self.templates_dir = templates_dir
        self.template_name = template_name
        self.medal_path = templates_dir / medal_asset_name
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "htm", "xml"]),
            undefined=StrictUndefined,
        )

    def load_medal(self) -> str:
        """Read the medal image and return it base64-encoded.

        Raises:
            OSError: If the asset cannot be read
        """
        return base64.b64encode(self.medal_path.read_bytes()).decode("ascii")

    def render(self, data: CertificateTemplateData) -> str:
        """Render the template to an HTML string.

        Raises:
            jinja2.TemplateError: If the template is missing or fails to render
        """
        template = self._env.get_template(self.template_name)
        return template.render(**data)
