# =============================================
# File: hummbl_api/cli/serve.py
# Purpose: Run the HTTP API under uvicorn
# Usage:
#   python -m hummbl_api.cli.serve --port 8000
#   TRUST_PROXY_HEADERS=true python -m hummbl_api.cli.serve --host 0.0.0.0
# =============================================
from __future__ import annotations
import argparse

import uvicorn

from hummbl_api.config import log_level, server_host, server_port

APP_PATH = "hummbl_api.main:app"


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Serve the HUMMBL API.")
    ap.add_argument("--host", default=server_host(), help="Bind address (env HOST, default: 127.0.0.1)")
    ap.add_argument("--port", type=int, default=server_port(), help="Bind port (env PORT, default: 8000)")
    ap.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    args = ap.parse_args(argv)

    uvicorn.run(
        APP_PATH,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=log_level().lower(),
        proxy_headers=False,
    )
    return 0


if __name__ == "__main__":
    main()
