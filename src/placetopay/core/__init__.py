"""Auth signing, transport, retries and validators."""
