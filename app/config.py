import os
from dotenv import load_dotenv

load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# items per page for report listings
REPORTS_PAGE_SIZE = int(os.getenv("REPORTS_PAGE_SIZE", "15"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
