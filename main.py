"""Launch the cross-section FastAPI server."""

import uvicorn

from cross_section.config import Settings
from cross_section.logging_utils import configure_logging


def main():
    configure_logging(Settings.from_env().log_level)
    uvicorn.run("cross_section.server:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    main()
