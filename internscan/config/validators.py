"""Non-fatal configuration checks."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    companies = config_dict.get("companies", [])
    if isinstance(companies, list):
        for company in companies:
            if not isinstance(company, dict):
                continue
            name = company.get("name", "Unknown")
            website = company.get("website") or ""
            if "wikipedia.org" in str(website):
                warning_messages.append(
                    f"Company '{name}' has a Wikipedia URL as website; it will be ignored for URL synthesis"
                )
            if not company.get("career_pages") and not website:
                warning_messages.append(
                    f"Company '{name}' has no website or career pages; its careers URL will be guessed from the name"
                )

    fetch = config_dict.get("fetch", {})
    if isinstance(fetch, dict):
        timeout = fetch.get("timeout_seconds")
        if isinstance(timeout, (int, float)) and timeout > 60:
            warning_messages.append(
                f"Long fetch timeout ({timeout}s) will slow down scans of unreachable sites"
            )

    extraction = config_dict.get("extraction", {})
    if isinstance(extraction, dict):
        max_containers = extraction.get("max_containers")
        if isinstance(max_containers, int) and max_containers > 200:
            warning_messages.append(
                f"Large max_containers ({max_containers}) increases noise from heuristic extraction"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
