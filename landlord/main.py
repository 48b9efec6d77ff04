"""Main entry point for the progression API"""
import logging

import uvicorn

from landlord.api.server import create_api_application
from landlord.config import API_HOST, API_PORT, LOG_LEVEL, validate_config
from landlord.exceptions import ConfigurationError

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL, logging.INFO)
)

logger = logging.getLogger(__name__)


def main() -> None:
    """Main application entry point"""
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_config()
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e.message}")
        raise SystemExit(1)

    app = create_api_application()
    logger.info(f"Serving API on {API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
