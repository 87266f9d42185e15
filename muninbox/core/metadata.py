"""Plugin metadata parsing from header comments."""

import re
from typing import Any

import yaml


class MetadataError(Exception):
    """Error parsing or validating plugin metadata."""

    pass


# Required fields in metadata
REQUIRED_FIELDS = {"category", "brief"}

# Capabilities understood by munin-node-configure
VALID_CAPABILITIES = {"autoconf", "suggest"}

# Munin graph categories are single lowercase words
CATEGORY_PATTERN = re.compile(r"^[a-z]+$")

# Maximum lines to search for header
MAX_HEADER_LINES = 20


def parse_metadata(content: str) -> dict[str, Any] | None:
    """
    Parse muninbox metadata from plugin header comments.

    Args:
        content: Full plugin source

    Returns:
        Parsed metadata dict, or None if no header found

    Raises:
        MetadataError: If header found but malformed or missing required fields
    """
    header_lines = content.split("\n")[:MAX_HEADER_LINES]

    start_idx = None
    for i, line in enumerate(header_lines):
        if line.strip() == "# muninbox:":
            start_idx = i
            break

    if start_idx is None:
        return None

    # Indented comment lines after "# muninbox:" form the YAML body
    yaml_lines = []
    for line in header_lines[start_idx + 1 :]:
        if not line.startswith("#   "):
            break
        yaml_lines.append(line[4:])

    if not yaml_lines:
        return None

    try:
        metadata = yaml.safe_load("\n".join(yaml_lines))
    except yaml.YAMLError as e:
        raise MetadataError(f"Invalid YAML in metadata: {e}")

    if not isinstance(metadata, dict):
        raise MetadataError("Metadata must be a YAML mapping")

    missing = REQUIRED_FIELDS - set(metadata.keys())
    if missing:
        raise MetadataError(f"Missing required fields: {', '.join(sorted(missing))}")

    return metadata


def validate_metadata(metadata: dict[str, Any]) -> list[str]:
    """
    Validate metadata and return warnings.

    Args:
        metadata: Parsed metadata dict

    Returns:
        List of warning messages (empty if valid)
    """
    warnings = []

    category = metadata.get("category", "")
    if not CATEGORY_PATTERN.match(str(category)):
        warnings.append(f"Category '{category}' should be a single lowercase word")

    capabilities = metadata.get("capabilities") or []
    unknown = set(capabilities) - VALID_CAPABILITIES
    if unknown:
        warnings.append(
            f"Unknown capabilities: {', '.join(sorted(unknown))}. "
            f"Use {' or '.join(sorted(VALID_CAPABILITIES))}."
        )

    return warnings
