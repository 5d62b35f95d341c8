# logger.py
import logging

import config

# Configure root logger (all modules can use this); level comes from LOG_LEVEL
logging.basicConfig(
    level=config.get_config().LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)

logger = logging.getLogger("OrderDeskLogger")
