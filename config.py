import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Cars hold 1..6 seats and groups are 1..6 people; index and queues have one bucket per size
MAX_SEATS = 6

HOST = os.environ.get("HOST", "0.0.0.0")

PORT_STR = os.environ.get("PORT", "9091")
try:
    PORT = int(PORT_STR)
except ValueError:
    PORT = 9091
    logger.warning(f"Invalid PORT: {PORT_STR}, using 9091")

DEBUG = os.environ.get("DEBUG", "false").lower() in ("true", "1")
