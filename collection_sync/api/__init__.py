"""HTTP API for webhooks and the manual trigger."""
