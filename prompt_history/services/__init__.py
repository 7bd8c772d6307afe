"""Business services and store adapters."""
