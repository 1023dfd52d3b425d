"""Identity - Credential loading, address derivation and signing."""
