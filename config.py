import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Credential (read by the CLI only, the client takes it as an argument)
DALLE_API_KEY = os.getenv("DALLE_API_KEY")

# Image API Configuration
DALLE_BASE_URL = os.getenv("DALLE_BASE_URL", "https://api.openai.com/v1/images")
DALLE_USER_AGENT = os.getenv("DALLE_USER_AGENT", "dalle-python")

# API Timeout Configuration
DALLE_TIMEOUT = float(os.getenv("DALLE_TIMEOUT", "30"))  # seconds

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "logs/dalle.log")
