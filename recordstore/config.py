import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    DATA_DIR = Path(os.getenv("RECORDSTORE_DATA_DIR", BASE_DIR / "data" / "stores"))
    ERROR_DUMP_DIR = os.getenv("RECORDSTORE_ERROR_DUMP_DIR") or None
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    JSON_SORT_KEYS = False


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False
