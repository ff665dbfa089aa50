# ================================
# TEST CONFIGURATION (tests/config.py)
# ================================

import os
from typing import Dict, Any

# Test Configuration
TEST_CONFIG: Dict[str, Any] = {
    "database_url": os.getenv("TEST_DATABASE_URL", "sqlite://"),
    "secret_key": os.getenv("TEST_SECRET_KEY", "test-secret-key-not-for-production"),
    "reviewer_name": os.getenv("TEST_REVIEWER_NAME", "reviewer"),
    "page_size": 20,
}

def apply_test_environment() -> None:
    """Point the application settings at the test database before it is imported."""
    os.environ["DATABASE_URL"] = TEST_CONFIG["database_url"]
    os.environ["SECRET_KEY"] = TEST_CONFIG["secret_key"]
    os.environ["OFFICE_REVIEWER_NAME"] = TEST_CONFIG["reviewer_name"]
    os.environ["OFFICES_PER_PAGE"] = str(TEST_CONFIG["page_size"])
    os.environ["DEBUG"] = "false"
    # Keep real mail transports out of the test run
    os.environ["AWS_ACCESS_KEY_ID"] = ""
    os.environ["AWS_SECRET_ACCESS_KEY"] = ""
    os.environ["SMTP_HOST"] = ""
