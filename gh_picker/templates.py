"""Loading issue templates from a repository checkout."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .github_client.models import IssueTemplate

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(".github/ISSUE_TEMPLATE")


def parse_template(text: str) -> dict[str, Any]:
    """Parse a markdown issue template with YAML front matter.

    Args:
        text: Template file content

    Returns:
        Front matter fields plus the markdown ``body``; an empty dict when
        the file has no front matter or it is not a mapping
    """
    if not text.startswith("---"):
        return {}
    _, _, rest = text.partition("\n")
    front_matter, separator, body = rest.partition("\n---")
    if not separator:
        return {}
    try:
        fields = yaml.safe_load(front_matter)
    except yaml.YAMLError as e:
        logger.warning(f"Invalid template front matter: {e}")
        return {}
    if not isinstance(fields, dict):
        return {}

    template = dict(fields)
    template["body"] = body.partition("\n")[2].lstrip("\n")
    return template


def load_templates(directory: str | Path = DEFAULT_TEMPLATE_DIR) -> list[dict]:
    """Load every markdown issue template in a directory.

    Front matter is validated as an ``IssueTemplate``; comma-separated labels
    become a list. Files without usable front matter yield empty entries,
    which the templates picker drops.
    """
    path = Path(directory)
    if not path.is_dir():
        return []

    templates: list[dict] = []
    for file_path in sorted(path.glob("*.md")):
        with open(file_path, encoding="utf-8") as f:
            fields = parse_template(f.read())
        if not fields:
            templates.append({})
            continue
        try:
            template = IssueTemplate.model_validate(fields)
        except ValidationError as e:
            logger.warning(f"Skipping invalid template {file_path.name}: {e}")
            templates.append({})
            continue
        templates.append(template.model_dump())
    return templates
