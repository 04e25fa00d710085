"""
Console output helpers shared by the entry scripts
"""

import logging
import traceback


def print_status(message, level="info"):
    """Simple console output with different levels"""
    if level == "header":
        print(f"\n{message}")
        print("=" * len(message))
    elif level == "section":
        print(f"\n{message}")
    else:
        print(message)


def print_failure(title: str, error: Exception):
    """Report a fatal error with its traceback"""
    print_status(f"ERROR: {title}", "section")
    print_status(f"   Error details: {str(error)}")
    print_status(f"   Error type: {type(error).__name__}")

    print_status("Full traceback:", "section")
    tb_str = traceback.format_exc()
    for line in tb_str.split("\n"):
        if line.strip():
            print_status(line)


def configure_logging(level_name: str = "INFO"):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # The SDKs log every HTTP request at INFO
    logging.getLogger("azure").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
