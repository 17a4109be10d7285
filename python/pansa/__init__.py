"""PANSA Proxy - a thin reverse proxy in front of the NetShort API."""
