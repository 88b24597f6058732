"""Route modules for the policy page API."""
