"""Bank back-office service: registration, authentication and staff management."""
