# store_backend/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./store.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# co ktore zamowienie wydajemy kod lojalnosciowy
NTH_ORDER = int(os.getenv("NTH_ORDER", 4))
DEFAULT_DISCOUNT_PERCENT = float(os.getenv("DEFAULT_DISCOUNT_PERCENT", 10))
DISCOUNT_CODE_LENGTH = int(os.getenv("DISCOUNT_CODE_LENGTH", 8))
MAX_CODE_GENERATION_ATTEMPTS = int(os.getenv("MAX_CODE_GENERATION_ATTEMPTS", 100))

ADMIN_API_KEY = os.getenv("ADMIN_API_KEY")
