"""TimeJoy sidecar HTTP API."""
