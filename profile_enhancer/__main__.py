import logging

import uvicorn

from profile_enhancer.core.config import load_config


def main():
    config = load_config()

    # Настройка логирования
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger("profile_enhancer")
    logger.info(f"Starting Profile Enhancer on {config.host}:{config.port}")

    uvicorn.run(
        "profile_enhancer.service:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
