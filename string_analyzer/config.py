import os

from dotenv import load_dotenv

load_dotenv()

# "memory" keeps records for the lifetime of the process, "sql" uses DATABASE_URL
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory").lower()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./strings.db")

# Railway sometimes provides the URL in a slightly different variable
if DATABASE_URL.startswith("mysql://"):
    # SQLAlchemy expects "mysql+pymysql://"
    DATABASE_URL = DATABASE_URL.replace("mysql://", "mysql+pymysql://", 1)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
