"""Admin configuration for the write endpoints."""

import os
from dataclasses import dataclass


@dataclass
class AdminConfig:
    """Admin configuration settings."""

    api_key: str = ""

    def __post_init__(self):
        """Load API key from environment if not provided."""
        if not self.api_key:
            self.api_key = os.environ.get('ADMIN_API_KEY', '')

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.api_key:
            raise ValueError("ADMIN_API_KEY environment variable is required")
        return True

    def verify_auth(self, auth_header: str) -> bool:
        """Verify admin authorization header."""
        return bool(auth_header and auth_header == self.api_key)
