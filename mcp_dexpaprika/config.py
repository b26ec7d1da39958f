import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file in the project root
dotenv_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=dotenv_path)

# The API host is fixed; the log level is the only setting read from the environment.
API_BASE_URL = "https://api.dexpaprika.com"
SERVER_NAME = "dexpaprika-mcp"

LOG_LEVEL = os.getenv("DEXPAPRIKA_LOG_LEVEL", "INFO").upper()
