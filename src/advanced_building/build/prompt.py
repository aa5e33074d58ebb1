"""Interactive yes/no gates in front of publishing actions."""

import logging

logger = logging.getLogger(__name__)


def confirm(question: str, assume_yes: bool = False) -> bool:
    """Ask ``question (y,n):``; only an answer of exactly ``y`` confirms."""
    if assume_yes:
        return True
    try:
        response = input(f"{question} (y,n): ")
    except EOFError:
        logger.warning(f"No answer to '{question}' (stdin closed), treating it as no")
        return False
    return response.strip() == "y"
