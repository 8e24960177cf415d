#!/usr/bin/env python3
"""Launch the Storage Hub API with uvicorn, honouring PORT and HOST from the environment."""

import logging
import os
import sys

import uvicorn

logger = logging.getLogger("storehub.server")


def _port_from_env(default: int = 8000) -> int:
    raw = os.environ.get("PORT", str(default))
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid PORT value %r, using %d", raw, default)
        return default


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # src layout is importable even when the package is not installed
    src_path = os.path.abspath("src")
    if os.path.isdir(src_path) and src_path not in sys.path:
        sys.path.insert(0, src_path)

    port = _port_from_env()
    host = os.environ.get("HOST", "0.0.0.0")
    logger.info("Starting Storage Hub API on %s:%d", host, port)
    uvicorn.run(
        "storehub.main:app",
        host=host,
        port=port,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
