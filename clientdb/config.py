"""Configuration loader — .env secrets + config.yaml settings."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .qr import QRSettings

PACKAGE_DIR = Path(__file__).parent
load_dotenv(PACKAGE_DIR / ".env")

# Load YAML config
_config_path = PACKAGE_DIR / "config.yaml"
if _config_path.exists():
    with open(_config_path) as f:
        _raw = yaml.safe_load(f) or {}
else:
    _raw = {}

# Firestore
firestore_cfg = _raw.get("firestore", {})
PROJECT_ENV = firestore_cfg.get("project_env", "GCP_PROJECT")
GCP_PROJECT = os.getenv(PROJECT_ENV, "")
CLIENTS_COLLECTION = firestore_cfg.get("clients_collection", "clients")
SECTIONS_COLLECTION = firestore_cfg.get("sections_collection", "sections")

# Storage
storage_cfg = _raw.get("storage", {})
STORAGE_BUCKET = os.getenv(storage_cfg.get("bucket_env", "STORAGE_BUCKET"), "") or storage_cfg.get("bucket", "")

# QR codes
qr_cfg = _raw.get("qr", {})
QR_DEFAULT_FOLDER = qr_cfg.get("default_folder", "qr-codes")
QR_DEFAULT_FILE_NAME = qr_cfg.get("default_file_name", "1450 Scanner Program.png")
QR_URL_SCHEMES = tuple(qr_cfg.get("url_schemes", ["https://", "gs://"]))

# HTTP
http_cfg = _raw.get("http", {})
HTTP_TIMEOUT = http_cfg.get("timeout_seconds", 10)

# Logging
logging_cfg = _raw.get("logging", {})
LOG_LEVEL = os.getenv("LOG_LEVEL", "") or logging_cfg.get("level", "INFO")


def qr_settings() -> QRSettings:
    """Build the QR settings value handed to resolver callers."""
    return QRSettings(
        storage_bucket=STORAGE_BUCKET,
        default_folder=QR_DEFAULT_FOLDER,
        default_file_name=QR_DEFAULT_FILE_NAME,
        url_schemes=QR_URL_SCHEMES,
    )


def get_raw() -> dict:
    """Return the raw parsed YAML config."""
    return _raw.copy()
