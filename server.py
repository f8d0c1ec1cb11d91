import os

import uvicorn
from loguru import logger

from salonbook.api.app import create_app

app = create_app()


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting salonbook API on port {}", port)
    uvicorn.run("server:app", host="0.0.0.0", port=port, log_level="info")
