import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("mongoscript")
