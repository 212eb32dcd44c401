import os
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("THEMEKIT_DOMAIN", "example.myshopify.com")
os.environ.setdefault("THEMEKIT_PASSWORD", "shppa_test_password")
