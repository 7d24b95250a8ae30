"""
Canonical entry point for aq_monitor_core package.

This package contains the domain model, ports and configuration.
It does not open connections or render anything.
"""

import sys

from aq_monitor_core.config.environments import get_settings


def main() -> None:
    """Main entry point for aq_monitor_core package."""
    print("aq_monitor_core - Domain and configuration package")
    print("This package is not intended to be run directly.")
    print("Use the aq_monitor_client package (aq-monitor) instead.")

    try:
        config = get_settings()
        print("\nCurrent configuration:")
        print(f"Environment: {config.ENVIRONMENT}")
        print(f"Device: {config.DEVICE_HOST}{config.WS_PATH} (secure={config.DEVICE_SECURE})")
        print(f"Reconnect delay: {config.RECONNECT_DELAY_SEC}s")
        print(f"Status poll interval: {config.STATUS_POLL_INTERVAL_SEC}s")
    except Exception as e:
        print(f"Could not load configuration: {e}")

    sys.exit(0)


if __name__ == "__main__":
    main()
