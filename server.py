import argparse

import uvicorn

from domviz.config import Settings
from domviz.server import app

argparser = argparse.ArgumentParser(
    description="Serve the DOM visualizer API."
)
argparser.add_argument("--config")
argparser.add_argument("--host")
argparser.add_argument("--port", type=int)


if __name__ == "__main__":
    args = argparser.parse_args()
    settings = Settings.from_file(args.config) if args.config else Settings()
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )

# Usage:
# uv run server.py --port 8000
