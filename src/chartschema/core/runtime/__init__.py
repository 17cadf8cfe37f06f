"""Runtime helpers: environment access and structured logging."""
