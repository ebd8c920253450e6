"""
Development server: ``python -m portfolio``.
"""
import sys

from sqlalchemy.exc import SQLAlchemyError

from portfolio.config import Config
from portfolio.exceptions import ConfigError
from portfolio.factory import create_app, shutdown
from portfolio.infra.log import get_logger

logger = get_logger("portfolio.startup")


def main() -> int:
    try:
        config = Config.from_env()
        app = create_app(config)
    except (ConfigError, SQLAlchemyError) as e:
        logger.error("startup failed", error=str(e))
        return 1

    logger.info("server starting", addr=f":{config.port}")
    try:
        app.run(host="0.0.0.0", port=config.port, threaded=True)
    finally:
        shutdown(app)
        logger.info("server stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
