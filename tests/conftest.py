"""Shared test configuration.

Loads the project .env so OAS_TYPINGS_* overrides apply to the test run the
same way they apply to the library.
"""

from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.resolve()
load_dotenv(PROJECT_ROOT / ".env")
