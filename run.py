#!/usr/bin/env python3
"""
Main entrypoint: configure logging and serve the duecal API.
Run with: python run.py
"""
from __future__ import annotations

import logging
import sys

from config import load as load_config


def main() -> None:
    config = load_config()
    # App loggers (duecal.api, indicator_service, ...) emit to the same stream as uvicorn
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )

    import uvicorn
    uvicorn.run(
        "web_app:app",
        host="0.0.0.0",
        port=config.web_ui_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
