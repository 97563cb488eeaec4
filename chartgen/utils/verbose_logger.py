"""Consistent console logging for clients and sessions"""

import logging

logger = logging.getLogger("chartgen")


def color_text(text: str, color: str) -> str:
    """Color text for terminal output"""
    colors = {
        'yellow': '\033[93m',
        'red': '\033[91m',
        'cyan': '\033[96m',
        'dim': '\033[2m',
        'reset': '\033[0m'
    }
    return f"{colors.get(color, '')}{text}{colors['reset']}"


class VerboseLogger:
    """Routes events to the `chartgen` logger and, when verbose, echoes them to the terminal."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose

    def log_request(self, provider: str, model: str) -> None:
        logger.info("Calling %s (%s)", provider, model)
        if self.verbose:
            print(color_text(f"→ {provider} [{model}]", 'dim'))

    def log_content(self, content: str) -> None:
        logger.debug("Response content: %s", content)
        if self.verbose:
            print(color_text(content, 'cyan'))

    def log_info(self, message: str) -> None:
        logger.info(message)
        if self.verbose:
            print(color_text(message, 'dim'))

    def log_warning(self, message: str) -> None:
        logger.warning(message)
        if self.verbose:
            print(color_text(f"⚠ {message}", 'yellow'))

    def log_error(self, message: str) -> None:
        logger.error(message)
        if self.verbose:
            print(color_text(f"✗ {message}", 'red'))
