"""
Product API entry point
"""

# Load environment variables from .env file FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

from product_api.application import create_app
from product_api.core.config import config
from product_api.core.logger import logger

app = create_app(config)


if __name__ == "__main__":
    import uvicorn

    logger.info(
        f"Starting {config.service_name} on port {config.port}",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "port": config.port,
        },
    )

    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.is_development,
    )
